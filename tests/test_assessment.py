from types import SimpleNamespace

import pytest
from django.core.exceptions import ValidationError

from hr.models import JobResponsibility
from performance.services.assessment import (
    SCORE_CHAIN,
    SELF_RATING_CHAIN,
    SOURCE_KRA_ID_CHAIN,
    error_message,
    mode_requires_kras,
    resolve_assessment_mode,
)

Mode = JobResponsibility.AssessmentMode


# ---------------------------------------------------------------------------
# Mode resolution
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "declared, has_kras, expected",
    [
        (Mode.AUTO, False, Mode.RESPONSIBILITY_ONLY),
        (Mode.AUTO, True, Mode.KRA_BASED),
        (Mode.KRA_BASED, False, Mode.KRA_BASED),
        (Mode.KRA_BASED, True, Mode.KRA_BASED),
        (Mode.HYBRID, False, Mode.HYBRID),
        (Mode.RESPONSIBILITY_ONLY, True, Mode.RESPONSIBILITY_ONLY),
    ],
)
def test_resolve_assessment_mode(declared, has_kras, expected):
    assert resolve_assessment_mode(declared, has_kras) == expected


def test_resolve_accepts_plain_strings():
    assert resolve_assessment_mode("auto", True) == "kra_based"


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        resolve_assessment_mode("weekly", True)


def test_only_kra_modes_require_kras():
    assert mode_requires_kras(Mode.KRA_BASED)
    assert mode_requires_kras(Mode.HYBRID)
    assert not mode_requires_kras(Mode.RESPONSIBILITY_ONLY)


# ---------------------------------------------------------------------------
# Fallback chains
# ---------------------------------------------------------------------------


def test_source_kra_prefers_linked_library_kra():
    linked = SimpleNamespace(responsibility_kra_id=7, id=42)
    standalone = SimpleNamespace(responsibility_kra_id=None, id=42)

    assert SOURCE_KRA_ID_CHAIN.resolve(linked) == ("kra", 7)
    assert SOURCE_KRA_ID_CHAIN.resolve(standalone) == ("jobkra", 42)


def test_self_rating_falls_back_to_manager():
    assert SELF_RATING_CHAIN.first(SimpleNamespace(self_rating=3, manager_rating=5)) == 3
    assert SELF_RATING_CHAIN.first(SimpleNamespace(self_rating=None, manager_rating=5)) == 5


def test_score_chain_priority():
    snap = SimpleNamespace(final_score=None, manager_rating=None, self_rating=2)
    assert SCORE_CHAIN.resolve(snap) == ("self", 2)

    snap.manager_rating = 4
    assert SCORE_CHAIN.resolve(snap) == ("manager", 4)

    snap.final_score = 5
    assert SCORE_CHAIN.resolve(snap) == ("final", 5)


def test_score_chain_empty_snapshot():
    snap = SimpleNamespace(final_score=None, manager_rating=None, self_rating=None)
    assert SCORE_CHAIN.resolve(snap) == (None, None)


def test_error_message_flattens_validation_errors():
    assert error_message(ValidationError("Bad rating.")) == "Bad rating."
    assert error_message(RuntimeError("boom")) == "boom"
