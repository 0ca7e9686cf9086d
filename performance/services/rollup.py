# performance/services/rollup.py
# ============================================================
# Rollup Calculator
# - درجة المسؤولية = متوسط موزون لدرجات KRA snapshots
# - درجة المشارك (مكوّن المسؤوليات) = متوسط موزون بأوزان المسؤوليات في الوظيفة
# - قراءة فقط؛ الإقفال (finalize) هو الكتابة الوحيدة هنا
# ============================================================
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from django.db import transaction
from django.db.models import Count
from django.utils import timezone

from hr.models import JobResponsibility
from performance.exceptions import InvalidRatingError, ParticipantFinalized, ParticipantNotFound
from performance.models import AppraisalKRASnapshot, AppraisalParticipant
from performance.services.assessment import Mode, SCORE_CHAIN, resolve_assessment_mode
from performance.services.ratings import rating_scale

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class ResponsibilityRollup:
    responsibility_id: int
    name: str
    weighting: int
    effective_mode: str
    score: Optional[Decimal]
    source: str  # kra | direct | none


@dataclass
class ParticipantRollup:
    participant_id: int
    overall: Optional[Decimal]
    responsibilities: List[ResponsibilityRollup] = field(default_factory=list)

    def score_for(self, responsibility_id) -> Optional[Decimal]:
        for r in self.responsibilities:
            if r.responsibility_id == responsibility_id:
                return r.score
        return None


def weighted_mean(pairs: Iterable[Tuple[object, int]]) -> Optional[Decimal]:
    """
    Σ(score × weight) / Σ(weight) over pairs with a score and weight > 0.
    None when nothing contributes (never 0).
    """
    numerator = Decimal(0)
    denominator = 0
    for score, weight in pairs:
        if score is None or not weight or weight <= 0:
            continue
        numerator += Decimal(str(score)) * weight
        denominator += weight
    if denominator == 0:
        return None
    return (numerator / denominator).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _snapshot_pairs(snapshots) -> List[Tuple[object, int]]:
    return [(SCORE_CHAIN.first(s), s.weight) for s in snapshots]


def rollup_responsibility(participant_id, responsibility_id, company_id) -> Optional[Decimal]:
    """Weighted responsibility score from its KRA snapshots (final → manager → self per snapshot)."""
    snapshots = (
        AppraisalKRASnapshot.objects.all_companies()
        .for_responsibility(participant_id, responsibility_id, company_id)
        .only("weight", "final_score", "manager_rating", "self_rating")
    )
    return weighted_mean(_snapshot_pairs(snapshots))


def _direct_score(direct_scores: Mapping, responsibility_id) -> Optional[Decimal]:
    raw = direct_scores.get(responsibility_id)
    if raw is None:
        return None
    low, high = rating_scale()
    try:
        value = Decimal(str(raw))
    except InvalidOperation:
        raise InvalidRatingError(f"Direct score for responsibility {responsibility_id} is not a number.")
    if not value.is_finite() or not low <= value <= high:
        raise InvalidRatingError(f"Direct score {raw} for responsibility {responsibility_id} is outside {low}..{high}.")
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def rollup_participant(participant_id, company_id, direct_scores: Optional[Mapping] = None) -> ParticipantRollup:
    """
    Score every effective responsibility of the participant's job, then weight them
    by their job weighting. responsibility_only items take their score from
    direct_scores[responsibility_id]; KRA-scored items fall back to it when unrated.
    """
    direct_scores = direct_scores or {}
    participant = AppraisalParticipant.all_objects.filter(company_id=company_id, pk=participant_id).first()
    if participant is None:
        raise ParticipantNotFound(f"Participant {participant_id} not found in company {company_id}.")

    by_responsibility: Dict[int, list] = defaultdict(list)
    snapshots = (
        AppraisalKRASnapshot.objects.all_companies()
        .for_participant(participant_id, company_id)
        .only("responsibility", "weight", "final_score", "manager_rating", "self_rating")
    )
    for snap in snapshots:
        by_responsibility[snap.responsibility_id].append(snap)

    links = (
        JobResponsibility.objects.all_companies()
        .for_job(participant.job_id, company_id)
        .annotate(kra_count=Count("kras"))
    )

    items: List[ResponsibilityRollup] = []
    for link in links:
        mode = resolve_assessment_mode(link.assessment_mode, link.kra_count > 0)
        score, source = None, "none"
        if mode != Mode.RESPONSIBILITY_ONLY:
            score = weighted_mean(_snapshot_pairs(by_responsibility.get(link.responsibility_id, [])))
            if score is not None:
                source = "kra"
        if score is None:
            score = _direct_score(direct_scores, link.responsibility_id)
            if score is not None:
                source = "direct"
        items.append(ResponsibilityRollup(
            responsibility_id=link.responsibility_id,
            name=link.responsibility.name,
            weighting=link.weighting,
            effective_mode=str(mode),
            score=score,
            source=source,
        ))

    overall = weighted_mean((r.score, r.weighting) for r in items)
    return ParticipantRollup(participant_id=participant.id, overall=overall, responsibilities=items)


@transaction.atomic
def finalize_participant(participant_id, company_id, direct_scores: Optional[Mapping] = None) -> ParticipantRollup:
    """Store the responsibility component score and close the participant's snapshots for rating."""
    participant = (
        AppraisalParticipant.objects.all_companies()
        .select_for_update()
        .filter(company_id=company_id, pk=participant_id)
        .first()
    )
    if participant is None:
        raise ParticipantNotFound(f"Participant {participant_id} not found in company {company_id}.")
    if participant.is_finalized:
        raise ParticipantFinalized("Participant is already finalized.")

    rollup = rollup_participant(participant_id, company_id, direct_scores)

    participant.responsibility_score = rollup.overall
    participant.status = AppraisalParticipant.Status.FINALIZED
    participant.finalized_at = timezone.now()
    participant.save(update_fields=["responsibility_score", "status", "finalized_at", "updated_at"])
    logger.info("Finalized participant %s with responsibility score %s", participant_id, rollup.overall)
    return rollup
