# performance/services/ratings.py
# ============================================================
# Snapshot Rating Recorder
# - تقييم ذاتي: self_rating → self_rated
# - تقييم المدير: manager_rating → حساب الدرجات → completed
# - آخر كتابة تفوز (لا يوجد تراكم)
# ============================================================
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import List, Optional, Tuple

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, transaction
from django.utils import timezone

from hr.models import Employee
from performance.exceptions import (
    InvalidRatingError,
    ParticipantFinalized,
    RatingNotAllowed,
    SnapshotNotFound,
)
from performance.models import AppraisalKRASnapshot
from performance.services.assessment import SELF_RATING_CHAIN, error_message

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")

SELF_FIELDS = ["self_rating", "self_comments", "self_rated_at"]
MANAGER_FIELDS = ["manager_rating", "manager_comments", "manager_rated_at", "manager"]
SCORE_FIELDS = ["calculated_score", "final_score", "weight_adjusted_score"]


@dataclass(frozen=True)
class RatingResult:
    success: bool
    error: Optional[str] = None


# ------------------------------------------------------------
# Scale
# ------------------------------------------------------------

def rating_scale() -> Tuple[int, int]:
    return settings.APPRAISAL_RATING_MIN, settings.APPRAISAL_RATING_MAX


def validate_rating(rating) -> int:
    """Whole numbers inside the configured scale; anything else is rejected before any write."""
    low, high = rating_scale()
    if rating is None or isinstance(rating, bool):
        raise InvalidRatingError(f"Rating must be a whole number between {low} and {high}.")
    try:
        value = Decimal(str(rating).strip())
    except InvalidOperation:
        raise InvalidRatingError(f"Rating must be a whole number between {low} and {high}.")
    if not value.is_finite() or value != value.to_integral_value():
        raise InvalidRatingError(f"Rating must be a whole number between {low} and {high}.")
    value = int(value)
    if not low <= value <= high:
        raise InvalidRatingError(f"Rating {value} is outside the scale {low}..{high}.")
    return value


# ------------------------------------------------------------
# Scores
# ------------------------------------------------------------

def compute_scores(snapshot: AppraisalKRASnapshot) -> None:
    """
    calculated = (effective self + manager) / 2
    final      = manager
    weighted   = calculated × weight / 100
    """
    manager = Decimal(snapshot.manager_rating)
    effective_self = Decimal(SELF_RATING_CHAIN.first(snapshot))
    calculated = ((effective_self + manager) / 2).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    snapshot.calculated_score = calculated
    snapshot.final_score = manager.quantize(TWO_PLACES)
    snapshot.weight_adjusted_score = (calculated * Decimal(snapshot.weight) / 100).quantize(
        FOUR_PLACES, rounding=ROUND_HALF_UP
    )
    snapshot.status = AppraisalKRASnapshot.Status.COMPLETED


def _lock_snapshot(snapshot_id, company_id) -> AppraisalKRASnapshot:
    snapshot = (
        AppraisalKRASnapshot.objects.all_companies()
        .select_related("participant", "participant__employee")
        .select_for_update(of=("self",))
        .filter(company_id=company_id, pk=snapshot_id)
        .first()
    )
    if snapshot is None:
        raise SnapshotNotFound(f"KRA snapshot {snapshot_id} not found in company {company_id}.")
    if snapshot.participant.is_finalized:
        raise ParticipantFinalized("Participant is finalized; ratings are read-only.")
    return snapshot


def _check_access(user, snapshot, is_manager: bool) -> None:
    # استيراد محلي: قواعد الوصول تعتمد على base.access (تحميل نماذج hr)
    from performance.access import can_manager_rate, can_self_rate

    allowed = can_manager_rate(user, snapshot) if is_manager else can_self_rate(user, snapshot)
    if not allowed:
        kind = "manager" if is_manager else "self"
        raise RatingNotAllowed(f"You are not allowed to submit a {kind} rating for this KRA.")


def _apply_self(snapshot, value: int, comments: str) -> List[str]:
    snapshot.self_rating = value
    snapshot.self_comments = comments or ""
    snapshot.self_rated_at = timezone.now()
    if snapshot.manager_rating is None:
        snapshot.status = AppraisalKRASnapshot.Status.SELF_RATED
        return SELF_FIELDS + ["status"]
    # المدير قيّم مسبقًا: أعد الحساب ويبقى completed
    compute_scores(snapshot)
    return SELF_FIELDS + SCORE_FIELDS + ["status"]


def _apply_manager(snapshot, value: int, comments: str, manager_id, company_id) -> List[str]:
    if manager_id is not None:
        if not Employee.all_objects.filter(company_id=company_id, pk=manager_id).exists():
            raise ValidationError(f"Manager {manager_id} is not an employee of company {company_id}.")
        snapshot.manager_id = manager_id

    snapshot.manager_rating = value
    snapshot.manager_comments = comments or ""
    snapshot.manager_rated_at = timezone.now()
    snapshot.status = AppraisalKRASnapshot.Status.MANAGER_RATED
    compute_scores(snapshot)
    return MANAGER_FIELDS + SCORE_FIELDS + ["status"]


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------

def record_rating(
    snapshot_id,
    company_id,
    *,
    is_manager: bool,
    rating,
    comments: str = "",
    manager_id=None,
    user=None,
) -> RatingResult:
    """
    Record a self or manager rating on one snapshot.
    Failures come back on the result; the snapshot is left untouched on failure.
    """
    try:
        value = validate_rating(rating)
        with transaction.atomic():
            snapshot = _lock_snapshot(snapshot_id, company_id)
            if user is not None:
                _check_access(user, snapshot, is_manager)

            if is_manager:
                fields = _apply_manager(snapshot, value, comments, manager_id, company_id)
            else:
                fields = _apply_self(snapshot, value, comments)
            snapshot.save(update_fields=fields + ["updated_at"])
    except (ValidationError, ObjectDoesNotExist, DatabaseError) as exc:
        logger.warning(
            "Rating rejected for KRA snapshot %s (manager=%s): %s", snapshot_id, is_manager, exc,
        )
        return RatingResult(success=False, error=error_message(exc))

    logger.info("Recorded %s rating %s on KRA snapshot %s", "manager" if is_manager else "self", value, snapshot_id)
    return RatingResult(success=True)


@transaction.atomic
def attach_evidence(snapshot_id, company_id, reference: str) -> List[str]:
    """Append an evidence reference (URL or file path) once; returns the updated list."""
    reference = (reference or "").strip()
    if not reference:
        raise ValidationError("Evidence reference is required.")

    snapshot = _lock_snapshot(snapshot_id, company_id)
    evidence = list(snapshot.evidence_urls or [])
    if reference not in evidence:
        evidence.append(reference)
        snapshot.evidence_urls = evidence
        snapshot.save(update_fields=["evidence_urls", "updated_at"])
        logger.info("Attached evidence to KRA snapshot %s", snapshot_id)
    return evidence
