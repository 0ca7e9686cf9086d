# performance/exceptions.py
"""
Typed failures of the KRA scoring engine.

Validation-type failures subclass Django's ValidationError so callers that
already handle form/model validation treat them the same way.
"""
from django.core.exceptions import ObjectDoesNotExist, ValidationError


class KRAEngineError(Exception):
    """Base class for every engine failure."""


class WeightDistributionError(KRAEngineError, ValidationError):
    pass


class InvalidRatingError(KRAEngineError, ValidationError):
    pass


class RatingNotAllowed(KRAEngineError, ValidationError):
    pass


class ParticipantFinalized(KRAEngineError, ValidationError):
    pass


class ParticipantNotFound(KRAEngineError, ObjectDoesNotExist):
    pass


class SnapshotNotFound(KRAEngineError, ObjectDoesNotExist):
    pass


class JobNotFound(KRAEngineError, ObjectDoesNotExist):
    pass
