# performance/services/__init__.py
from .assessment import (
    FallbackChain,
    SCORE_CHAIN,
    SELF_RATING_CHAIN,
    SOURCE_KRA_ID_CHAIN,
    mode_requires_kras,
    resolve_assessment_mode,
)
from .kra_snapshots import PopulateResult, populate_kra_snapshots, populate_participants_for_job
from .ratings import RatingResult, attach_evidence, record_rating
from .rollup import ParticipantRollup, ResponsibilityRollup, finalize_participant, rollup_participant, rollup_responsibility
from .weights import (
    JobWeightValidation,
    ResponsibilityWeightCheck,
    distribute_evenly,
    distribute_kra_weights,
    distribute_responsibility_weights,
    validate_company_jobs,
    validate_job_weights,
)
