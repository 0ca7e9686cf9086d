# performance/models/__init__.py
from .appraisal_participant import AppraisalParticipant
from .kra_snapshot import AppraisalKRASnapshot

__all__ = [
    "AppraisalParticipant",
    "AppraisalKRASnapshot",
]
