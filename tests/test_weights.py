import datetime

import pytest
from django.db import DatabaseError
from django.db.models import QuerySet

from hr.models import Job, JobResponsibility, JobResponsibilityKRA
from hr.models.job_responsibility import JobResponsibilityKRAQuerySet, JobResponsibilityQuerySet
from performance.exceptions import JobNotFound, WeightDistributionError
from performance.services.weights import (
    distribute_evenly,
    distribute_kra_weights,
    distribute_responsibility_weights,
    validate_company_jobs,
    validate_job_weights,
)

Mode = JobResponsibility.AssessmentMode


# ---------------------------------------------------------------------------
# distribute_evenly
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("n", [1, 2, 3, 6, 7, 33, 99, 100, 101, 150])
def test_distribution_always_totals_100(n):
    weights = distribute_evenly(list(range(n)))
    assert len(weights) == n
    assert sum(weights) == 100
    assert max(weights) - min(weights) <= 1


def test_extra_points_go_to_first_items():
    assert distribute_evenly(["a", "b", "c"]) == [34, 33, 33]
    assert distribute_evenly(["a", "b", "c", "d", "e", "f"]) == [17, 17, 17, 17, 16, 16]


def test_distribution_over_nothing_is_rejected():
    with pytest.raises(WeightDistributionError):
        distribute_evenly([])


# ---------------------------------------------------------------------------
# validate_job_weights
# ---------------------------------------------------------------------------


def test_valid_job(job, company, make_responsibility, link_responsibility, make_job_kra):
    sales = link_responsibility(make_responsibility("Sales Targets"), 70)
    link_responsibility(make_responsibility("Team Leadership"), 30, Mode.RESPONSIBILITY_ONLY)
    make_job_kra(sales, "Monthly Revenue", 100)

    report = validate_job_weights(job.id, company.id)

    assert report.responsibility_weight_total == 100
    assert report.is_responsibility_weight_valid
    assert report.is_fully_valid
    assert report.status == "valid"
    assert report.issue_count == 0

    checks = {c.responsibility_id: c for c in report.per_responsibility}
    assert checks[sales.responsibility_id].needs_kras
    assert checks[sales.responsibility_id].kra_weight_total == 100


def test_responsibility_total_off_is_an_error(job, company, make_responsibility, link_responsibility):
    link_responsibility(make_responsibility("Sales Targets"), 60)
    link_responsibility(make_responsibility("Team Leadership"), 30)

    report = validate_job_weights(job.id, company.id)

    assert report.responsibility_weight_total == 90
    assert not report.is_responsibility_weight_valid
    assert not report.is_fully_valid
    assert report.status == "error"
    assert "90%" in report.issues[0]


def test_kra_total_off_is_a_warning(job, company, make_responsibility, link_responsibility, make_job_kra):
    sales = link_responsibility(make_responsibility("Sales Targets"), 100, Mode.KRA_BASED)
    make_job_kra(sales, "Monthly Revenue", 50)
    make_job_kra(sales, "Basket Size", 30)

    report = validate_job_weights(job.id, company.id)

    assert report.is_responsibility_weight_valid
    assert not report.is_fully_valid
    assert report.status == "warning"
    check = report.per_responsibility[0]
    assert check.needs_kras
    assert check.kra_weight_total == 80
    assert not check.is_valid


def test_base_kra_linked_twice_is_a_warning(
    job, company, make_responsibility, link_responsibility, make_library_kra, make_job_kra
):
    sales = make_responsibility("Sales Targets")
    base = make_library_kra(sales, "Monthly Revenue", 100)
    link = link_responsibility(sales, 100)
    make_job_kra(link, weight=50, responsibility_kra=base)
    make_job_kra(link, weight=50, responsibility_kra=base)

    report = validate_job_weights(job.id, company.id)

    assert report.is_fully_valid
    assert report.status == "warning"
    assert report.issues == [
        f"'Sales Targets' links base KRA #{base.id} 2 times; only the first is snapshotted."
    ]


def test_responsibility_without_kras_is_exempt(job, company, make_responsibility, link_responsibility):
    link_responsibility(make_responsibility("Sales Targets"), 100, Mode.KRA_BASED)

    report = validate_job_weights(job.id, company.id)

    check = report.per_responsibility[0]
    assert not check.needs_kras
    assert check.is_valid
    assert report.is_fully_valid


def test_responsibility_only_ignores_kra_totals(job, company, make_responsibility, link_responsibility, make_job_kra):
    link = link_responsibility(make_responsibility("Team Leadership"), 100, Mode.RESPONSIBILITY_ONLY)
    make_job_kra(link, "Coaching", 10)

    report = validate_job_weights(job.id, company.id)

    assert not report.per_responsibility[0].needs_kras
    assert report.is_fully_valid


def test_ended_responsibilities_are_ignored(job, company, make_responsibility, link_responsibility):
    link_responsibility(make_responsibility("Sales Targets"), 100)
    link_responsibility(make_responsibility("Old Duty"), 40, end_date=datetime.date(2025, 12, 31))

    report = validate_job_weights(job.id, company.id)

    assert len(report.per_responsibility) == 1
    assert report.responsibility_weight_total == 100


def test_job_without_responsibilities(job, company):
    report = validate_job_weights(job.id, company.id)

    assert report.status == "error"
    assert not report.is_fully_valid
    assert report.issues == ["At least one responsibility is required."]


def test_job_of_another_company_is_not_found(job, other_company):
    with pytest.raises(JobNotFound):
        validate_job_weights(job.id, other_company.id)


def test_company_validation_lists_active_jobs_only(job, company):
    Job.objects.create(company=company, name="Retired Role", active=False)

    reports = validate_company_jobs(company.id)

    assert [r.job_id for r in reports] == [job.id]


# ---------------------------------------------------------------------------
# distribute_* (persisted)
# ---------------------------------------------------------------------------


def test_distribute_responsibility_weights(job, company, make_responsibility, link_responsibility):
    links = [link_responsibility(make_responsibility(n), 10) for n in ("A", "B", "C")]
    ended = link_responsibility(make_responsibility("D"), 25, end_date=datetime.date(2025, 1, 31))

    weights = distribute_responsibility_weights(job.id, company.id)

    assert weights == [34, 33, 33]
    stored = [JobResponsibility.objects.get(pk=link.pk).weighting for link in links]
    assert stored == [34, 33, 33]
    assert JobResponsibility.objects.get(pk=ended.pk).weighting == 25
    assert validate_job_weights(job.id, company.id).is_responsibility_weight_valid


def test_distribute_over_empty_job_writes_nothing(job, company):
    with pytest.raises(WeightDistributionError):
        distribute_responsibility_weights(job.id, company.id)


def test_distribute_kra_weights(company, make_responsibility, link_responsibility, make_job_kra):
    link = link_responsibility(make_responsibility("Sales Targets"), 100, Mode.KRA_BASED)
    kras = [make_job_kra(link, f"KRA {i}", 5) for i in range(7)]

    weights = distribute_kra_weights(link.id, company.id)

    assert sum(weights) == 100
    stored = [JobResponsibilityKRA.objects.get(pk=k.pk).weight for k in kras]
    assert stored == [15, 15, 14, 14, 14, 14, 14]


def test_distribute_kra_weights_follows_sequence(company, make_responsibility, link_responsibility, make_job_kra):
    link = link_responsibility(make_responsibility("Sales Targets"), 100, Mode.KRA_BASED)
    late = make_job_kra(link, "Late", 0, sequence_order=2)
    early = make_job_kra(link, "Early", 0, sequence_order=1)
    unsequenced = make_job_kra(link, "Unsequenced", 0)

    distribute_kra_weights(link.id, company.id)

    assert JobResponsibilityKRA.objects.get(pk=early.pk).weight == 34
    assert JobResponsibilityKRA.objects.get(pk=late.pk).weight == 33
    assert JobResponsibilityKRA.objects.get(pk=unsequenced.pk).weight == 33


def _fail_after_first_write(monkeypatch, queryset_class):
    # يكتب الصف الأول ثم يفشل في منتصف الدفعة
    def failing_bulk_update(self, objs, fields, batch_size=None):
        QuerySet.bulk_update(self, objs[:1], fields)
        raise DatabaseError("disk full")

    monkeypatch.setattr(queryset_class, "bulk_update", failing_bulk_update)


def test_failed_responsibility_redistribution_keeps_old_weights(
    job, company, make_responsibility, link_responsibility, monkeypatch
):
    links = [link_responsibility(make_responsibility(n), w) for n, w in (("A", 70), ("B", 20), ("C", 5))]
    _fail_after_first_write(monkeypatch, JobResponsibilityQuerySet)

    with pytest.raises(DatabaseError):
        distribute_responsibility_weights(job.id, company.id)

    assert [JobResponsibility.objects.get(pk=link.pk).weighting for link in links] == [70, 20, 5]


def test_failed_kra_redistribution_keeps_old_weights(
    company, make_responsibility, link_responsibility, make_job_kra, monkeypatch
):
    link = link_responsibility(make_responsibility("Sales Targets"), 100, Mode.KRA_BASED)
    kras = [make_job_kra(link, f"KRA {i}", w) for i, w in enumerate((60, 30, 5))]
    _fail_after_first_write(monkeypatch, JobResponsibilityKRAQuerySet)

    with pytest.raises(DatabaseError):
        distribute_kra_weights(link.id, company.id)

    assert [JobResponsibilityKRA.objects.get(pk=k.pk).weight for k in kras] == [60, 30, 5]


def test_distribute_kra_weights_other_company(company, other_company, make_responsibility, link_responsibility):
    link = link_responsibility(make_responsibility("Sales Targets"), 100)

    with pytest.raises(JobNotFound):
        distribute_kra_weights(link.id, other_company.id)
