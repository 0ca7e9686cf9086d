import datetime

import pytest

from base.models import Company, User
from hr.models import (
    Employee,
    Job,
    JobResponsibility,
    JobResponsibilityKRA,
    Responsibility,
    ResponsibilityKRA,
)
from performance.models import AppraisalKRASnapshot, AppraisalParticipant


# ---------------------------------------------------------------------------
# Companies & people
# ---------------------------------------------------------------------------


@pytest.fixture
def company(db):
    return Company.objects.create(name="Acme Retail")


@pytest.fixture
def other_company(db):
    return Company.objects.create(name="Globex")


@pytest.fixture
def make_user(db):
    def _make(email, company, **extra):
        return User.objects.create_user(email=email, password="secret", company=company, **extra)

    return _make


@pytest.fixture
def job(company):
    return Job.objects.create(company=company, name="Store Manager")


@pytest.fixture
def manager_user(make_user, company):
    return make_user("mona@acme.test", company)


@pytest.fixture
def manager(company, manager_user):
    return Employee.objects.create(company=company, name="Mona Manager", user=manager_user)


@pytest.fixture
def employee_user(make_user, company):
    return make_user("sami@acme.test", company)


@pytest.fixture
def employee(company, employee_user, manager, job):
    return Employee.objects.create(
        company=company, name="Sami Seller", user=employee_user, manager=manager, job=job
    )


@pytest.fixture
def make_participant(company, job, manager):
    def _make(employee, cycle_name="2026 Annual", **extra):
        extra.setdefault("job", job)
        extra.setdefault("evaluator", manager)
        return AppraisalParticipant.objects.create(
            company=company,
            employee=employee,
            cycle_name=cycle_name,
            date_start=datetime.date(2026, 1, 1),
            date_end=datetime.date(2026, 12, 31),
            **extra,
        )

    return _make


@pytest.fixture
def participant(make_participant, employee):
    return make_participant(employee)


# ---------------------------------------------------------------------------
# Job architecture builders
# ---------------------------------------------------------------------------


@pytest.fixture
def make_responsibility(company):
    def _make(name, **extra):
        return Responsibility.objects.create(company=company, name=name, **extra)

    return _make


@pytest.fixture
def link_responsibility(company, job):
    def _link(responsibility, weighting, mode=JobResponsibility.AssessmentMode.AUTO, **extra):
        extra.setdefault("job", job)
        return JobResponsibility.objects.create(
            company=company,
            responsibility=responsibility,
            weighting=weighting,
            assessment_mode=mode,
            **extra,
        )

    return _link


@pytest.fixture
def make_job_kra(company):
    def _make(link, name="", weight=0, **extra):
        return JobResponsibilityKRA.objects.create(
            company=company, job_responsibility=link, name=name, weight=weight, **extra
        )

    return _make


@pytest.fixture
def make_library_kra(company):
    def _make(responsibility, name, weight, **extra):
        return ResponsibilityKRA.objects.create(
            company=company, responsibility=responsibility, name=name, weight=weight, **extra
        )

    return _make


@pytest.fixture
def make_snapshot(company):
    counter = {"n": 0}

    def _make(participant, responsibility, weight, **extra):
        counter["n"] += 1
        extra.setdefault("snapshot_key", AppraisalKRASnapshot.build_key(responsibility.id, "jobkra", counter["n"]))
        extra.setdefault("name", f"KRA {counter['n']}")
        return AppraisalKRASnapshot.objects.create(
            company=company,
            participant=participant,
            responsibility=responsibility,
            weight=weight,
            **extra,
        )

    return _make
