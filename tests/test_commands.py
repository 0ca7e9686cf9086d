from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from performance.models import AppraisalKRASnapshot


@pytest.fixture
def sales_kra(make_responsibility, link_responsibility, make_job_kra):
    sales = link_responsibility(make_responsibility("Sales Targets"), 100)
    return make_job_kra(sales, "Monthly Revenue", 100)


def test_populate_one_participant(participant, company, sales_kra):
    out = StringIO()

    call_command("populate_kra_snapshots", "--company-id", company.id, "--participant-id", participant.id, stdout=out)

    assert "1 new, 0 existing" in out.getvalue()
    assert AppraisalKRASnapshot.objects.filter(participant=participant).count() == 1


def test_populate_whole_job(participant, company, job, sales_kra):
    out = StringIO()

    call_command("populate_kra_snapshots", "--company-id", company.id, "--job-id", job.id, stdout=out)
    call_command("populate_kra_snapshots", "--company-id", company.id, "--job-id", job.id, stdout=out)

    assert "0 new, 1 existing" in out.getvalue()


def test_populate_unknown_participant(company):
    with pytest.raises(CommandError):
        call_command("populate_kra_snapshots", "--company-id", company.id, "--participant-id", 999, stdout=StringIO())


def test_validate_reports_issues(job, company, make_responsibility, link_responsibility):
    link_responsibility(make_responsibility("Sales Targets"), 80)
    out = StringIO()

    call_command("validate_job_weights", "--company-id", company.id, stdout=out)

    output = out.getvalue()
    assert f"Job #{job.id}: error" in output
    assert "80%" in output
    assert "1 job(s) checked, 1 need attention." in output


def test_validate_unknown_job(company):
    with pytest.raises(CommandError):
        call_command("validate_job_weights", "--company-id", company.id, "--job-id", 12345, stdout=StringIO())


def test_populate_refuses_participant_of_another_company(participant, other_company, sales_kra):
    with pytest.raises(CommandError, match="not found in company"):
        call_command(
            "populate_kra_snapshots", "--company-id", other_company.id, "--participant-id", participant.id,
            stdout=StringIO(),
        )

    assert not AppraisalKRASnapshot.objects.filter(participant=participant).exists()
