from base.company_context import company_scope, get_company_id
from hr.models import Job, Responsibility


# ---------------------------------------------------------------------------
# Scoped managers
# ---------------------------------------------------------------------------


def test_objects_see_every_company_outside_a_scope(job, other_company):
    Job.objects.create(company=other_company, name="Warehouse Lead")

    assert get_company_id() is None
    assert Job.objects.count() == 2


def test_objects_are_limited_to_the_active_company(job, company, other_company):
    Job.objects.create(company=other_company, name="Warehouse Lead")

    with company_scope(other_company.id):
        assert list(Job.objects.values_list("name", flat=True)) == ["Warehouse Lead"]
        assert Job.all_objects.count() == 2

    assert get_company_id() is None


def test_nested_scopes_restore_the_outer_company(company, other_company):
    with company_scope(company.id):
        with company_scope(other_company.id):
            assert get_company_id() == other_company.id
        assert get_company_id() == company.id


def test_for_company_ignores_the_active_scope(job, company, other_company):
    with company_scope(other_company.id):
        assert Job.objects.all_companies().for_company(company.id).get() == job


# ---------------------------------------------------------------------------
# Company defaulting on save
# ---------------------------------------------------------------------------


def test_save_takes_company_from_scope(company):
    with company_scope(company.id):
        resp = Responsibility.objects.create(name="Sales Targets")

    assert resp.company_id == company.id


def test_explicit_company_wins_over_scope(company, other_company):
    with company_scope(company.id):
        resp = Responsibility.objects.create(company=other_company, name="Sales Targets")

    assert resp.company_id == other_company.id
