# performance/services/assessment.py
"""
Assessment-mode resolution and the engine's named fallback chains.

Both the weight validator and the snapshot populator resolve a
responsibility's effective mode through resolve_assessment_mode(); keep it
the single place where "auto" is interpreted.
"""
from __future__ import annotations

from dataclasses import dataclass
from operator import attrgetter
from typing import Any, Callable, Optional, Tuple

from django.core.exceptions import ValidationError

from hr.models import JobResponsibility

Mode = JobResponsibility.AssessmentMode

# الأنماط التي تتطلب تقييمًا على مستوى KRA
KRA_MODES = frozenset({Mode.KRA_BASED, Mode.HYBRID})


def resolve_assessment_mode(declared_mode: str, has_job_kras: bool) -> str:
    """
    declared → effective:
      responsibility_only → responsibility_only
      kra_based / hybrid  → unchanged
      auto                → kra_based if the job defines KRAs, else responsibility_only
    """
    if declared_mode == Mode.RESPONSIBILITY_ONLY:
        return Mode.RESPONSIBILITY_ONLY
    if declared_mode == Mode.KRA_BASED:
        return Mode.KRA_BASED
    if declared_mode == Mode.HYBRID:
        return Mode.HYBRID
    if declared_mode == Mode.AUTO:
        return Mode.KRA_BASED if has_job_kras else Mode.RESPONSIBILITY_ONLY
    raise ValueError(f"Unknown assessment mode: {declared_mode!r}")


def mode_requires_kras(effective_mode: str) -> bool:
    return effective_mode in KRA_MODES


# ------------------------------------------------------------
# Fallback chains
# ------------------------------------------------------------

@dataclass(frozen=True)
class FallbackChain:
    """
    Ordered candidate sources; the first one yielding a non-null value wins.
    candidates: ((label, getter), ...)
    """
    name: str
    candidates: Tuple[Tuple[str, Callable[[Any], Any]], ...]

    def resolve(self, obj) -> Tuple[Optional[str], Any]:
        for label, getter in self.candidates:
            value = getter(obj)
            if value is not None:
                return label, value
        return None, None

    def first(self, obj) -> Any:
        return self.resolve(obj)[1]


# Job KRA → identity of its source: linked base KRA, else the job KRA itself
SOURCE_KRA_ID_CHAIN = FallbackChain(
    "source_kra_id",
    (
        ("kra", attrgetter("responsibility_kra_id")),
        ("jobkra", attrgetter("id")),
    ),
)

# Self operand of the calculated score: manager rating stands in when self is missing
SELF_RATING_CHAIN = FallbackChain(
    "effective_self_rating",
    (
        ("self", attrgetter("self_rating")),
        ("manager", attrgetter("manager_rating")),
    ),
)

# Score a snapshot contributes to its responsibility rollup
SCORE_CHAIN = FallbackChain(
    "contributing_score",
    (
        ("final", attrgetter("final_score")),
        ("manager", attrgetter("manager_rating")),
        ("self", attrgetter("self_rating")),
    ),
)


def error_message(exc: Exception) -> str:
    """Flatten an exception into the error string carried by result objects."""
    if isinstance(exc, ValidationError):
        return "; ".join(exc.messages)
    return str(exc) or exc.__class__.__name__
