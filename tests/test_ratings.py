from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError

from hr.models import Employee
from performance.exceptions import ParticipantFinalized
from performance.models import AppraisalKRASnapshot, AppraisalParticipant
from performance.services.ratings import attach_evidence, record_rating, validate_rating

Status = AppraisalKRASnapshot.Status


@pytest.fixture
def snapshot(participant, make_responsibility, make_snapshot):
    return make_snapshot(participant, make_responsibility("Sales Targets"), weight=60)


def _reload(snapshot):
    return AppraisalKRASnapshot.objects.get(pk=snapshot.pk)


# ---------------------------------------------------------------------------
# Score math
# ---------------------------------------------------------------------------


def test_self_then_manager_rating(snapshot, company, manager):
    assert record_rating(snapshot.id, company.id, is_manager=False, rating=3, comments="Hit most targets").success
    assert _reload(snapshot).status == Status.SELF_RATED

    result = record_rating(snapshot.id, company.id, is_manager=True, rating=5, manager_id=manager.id)

    assert result.success and result.error is None
    snap = _reload(snapshot)
    assert snap.calculated_score == Decimal("4")
    assert snap.final_score == Decimal("5")
    assert snap.weight_adjusted_score == Decimal("2.4")
    assert snap.status == Status.COMPLETED
    assert snap.self_comments == "Hit most targets"
    assert snap.manager_id == manager.id
    assert snap.self_rated_at is not None and snap.manager_rated_at is not None


def test_manager_only_rating_uses_manager_as_both_operands(snapshot, company):
    record_rating(snapshot.id, company.id, is_manager=True, rating=5)

    snap = _reload(snapshot)
    assert snap.self_rating is None
    assert snap.calculated_score == Decimal("5")
    assert snap.final_score == Decimal("5")
    assert snap.weight_adjusted_score == Decimal("3")
    assert snap.status == Status.COMPLETED


def test_half_point_average(snapshot, company):
    record_rating(snapshot.id, company.id, is_manager=False, rating=4)
    record_rating(snapshot.id, company.id, is_manager=True, rating=3)

    snap = _reload(snapshot)
    assert snap.calculated_score == Decimal("3.50")
    assert snap.weight_adjusted_score == Decimal("2.1000")


def test_late_self_rating_recomputes_and_stays_completed(snapshot, company):
    record_rating(snapshot.id, company.id, is_manager=True, rating=5)
    record_rating(snapshot.id, company.id, is_manager=False, rating=3)

    snap = _reload(snapshot)
    assert snap.status == Status.COMPLETED
    assert snap.calculated_score == Decimal("4")
    assert snap.final_score == Decimal("5")


def test_last_manager_rating_wins(snapshot, company):
    record_rating(snapshot.id, company.id, is_manager=True, rating=2)
    record_rating(snapshot.id, company.id, is_manager=True, rating=4, comments="Revised")

    snap = _reload(snapshot)
    assert snap.manager_rating == 4
    assert snap.final_score == Decimal("4")
    assert snap.manager_comments == "Revised"


# ---------------------------------------------------------------------------
# Scale
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("rating", [0, 6, 2.5, "abc", "", None, True, float("nan"), float("inf")])
def test_invalid_ratings_are_rejected_before_writing(snapshot, company, rating):
    result = record_rating(snapshot.id, company.id, is_manager=True, rating=rating)

    assert not result.success
    assert result.error
    snap = _reload(snapshot)
    assert snap.manager_rating is None
    assert snap.status == Status.PENDING


def test_whole_number_strings_and_floats_are_accepted():
    assert validate_rating("4") == 4
    assert validate_rating(3.0) == 3
    assert validate_rating(Decimal("5")) == 5


def test_scale_comes_from_settings(settings, snapshot, company):
    settings.APPRAISAL_RATING_MAX = 10

    assert record_rating(snapshot.id, company.id, is_manager=True, rating=10).success
    assert _reload(snapshot).final_score == Decimal("10")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


def test_unknown_snapshot(company):
    result = record_rating(424242, company.id, is_manager=False, rating=3)

    assert not result.success
    assert "not found" in result.error


def test_snapshot_of_another_company(snapshot, other_company):
    assert not record_rating(snapshot.id, other_company.id, is_manager=False, rating=3).success


def test_manager_from_another_company_is_rejected(snapshot, company, other_company):
    outsider = Employee.objects.create(company=other_company, name="Greta Globex")

    result = record_rating(snapshot.id, company.id, is_manager=True, rating=4, manager_id=outsider.id)

    assert not result.success
    assert _reload(snapshot).manager_rating is None


def test_finalized_participant_rejects_ratings(snapshot, participant, company):
    AppraisalParticipant.objects.filter(pk=participant.pk).update(status=AppraisalParticipant.Status.FINALIZED)

    result = record_rating(snapshot.id, company.id, is_manager=False, rating=3)

    assert not result.success
    assert "finalized" in result.error


# ---------------------------------------------------------------------------
# Access rules
# ---------------------------------------------------------------------------


def test_employee_may_self_rate(snapshot, company, employee_user):
    assert record_rating(snapshot.id, company.id, is_manager=False, rating=4, user=employee_user).success


def test_employee_may_not_manager_rate_own_appraisal(snapshot, company, employee_user):
    result = record_rating(snapshot.id, company.id, is_manager=True, rating=5, user=employee_user)

    assert not result.success
    assert _reload(snapshot).manager_rating is None


def test_manager_may_manager_rate(snapshot, company, manager_user, manager):
    result = record_rating(snapshot.id, company.id, is_manager=True, rating=4, manager_id=manager.id, user=manager_user)

    assert result.success


def test_unrelated_user_is_denied(snapshot, company, make_user):
    stranger = make_user("nadia@acme.test", company)

    assert not record_rating(snapshot.id, company.id, is_manager=False, rating=4, user=stranger).success
    assert not record_rating(snapshot.id, company.id, is_manager=True, rating=4, user=stranger).success


# ---------------------------------------------------------------------------
# Evidence
# ---------------------------------------------------------------------------


def test_attach_evidence_is_deduplicated(snapshot, company):
    attach_evidence(snapshot.id, company.id, "https://files.acme.test/q1-sales.pdf")
    evidence = attach_evidence(snapshot.id, company.id, " https://files.acme.test/q1-sales.pdf ")

    assert evidence == ["https://files.acme.test/q1-sales.pdf"]
    assert _reload(snapshot).evidence_urls == evidence


def test_attach_evidence_requires_reference(snapshot, company):
    with pytest.raises(ValidationError):
        attach_evidence(snapshot.id, company.id, "   ")


def test_attach_evidence_on_finalized_participant(snapshot, participant, company):
    AppraisalParticipant.objects.filter(pk=participant.pk).update(status=AppraisalParticipant.Status.FINALIZED)

    with pytest.raises(ParticipantFinalized):
        attach_evidence(snapshot.id, company.id, "https://files.acme.test/late.pdf")
