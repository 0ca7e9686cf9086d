# performance/access.py
# ------------------------------------------------------------
# High-level business rules for appraisal ratings
# ------------------------------------------------------------
# IMPORTANT:
#   - This file does NOT grant permissions (see signals/ownership.py).
#   - Object permissions are read through django-guardian (user.has_perm(perm, obj)).
# ------------------------------------------------------------

from __future__ import annotations

from django.contrib.auth import get_user_model

from base.access import get_employee, is_in_same_company, user_is_in_manager_chain
from performance.models import AppraisalKRASnapshot, AppraisalParticipant

User = get_user_model()

SELF_RATE_PERM = "performance.self_rate_participant"
MANAGER_RATE_PERM = "performance.manager_rate_participant"


def _base_check(user: User, participant: AppraisalParticipant) -> bool:
    if not user or not user.is_authenticated or not user.is_active:
        return False
    return user.is_superuser or is_in_same_company(user, participant.company_id)


def can_self_rate_participant(user: User, participant: AppraisalParticipant) -> bool:
    """
    Self rating is open to:
    1) the participant's own employee
    2) anyone holding the self_rate object permission on the participant
    """
    if not _base_check(user, participant):
        return False
    if user.is_superuser:
        return True

    me = get_employee(user, participant.company_id)
    if me and participant.employee_id == me.id:
        return True

    return user.has_perm(SELF_RATE_PERM, participant)


def can_manager_rate_participant(user: User, participant: AppraisalParticipant) -> bool:
    """
    Manager rating is open to:
    1) the assigned evaluator
    2) the employee's manager (direct or up the chain)
    3) anyone holding the manager_rate object permission on the participant
    Nobody manager-rates their own appraisal.
    """
    if not _base_check(user, participant):
        return False
    if user.is_superuser:
        return True

    me = get_employee(user, participant.company_id)
    if me and participant.employee_id == me.id:
        return False

    if me and participant.evaluator_id == me.id:
        return True
    if user_is_in_manager_chain(user, participant.employee):
        return True

    return user.has_perm(MANAGER_RATE_PERM, participant)


def can_self_rate(user: User, snapshot: AppraisalKRASnapshot) -> bool:
    return can_self_rate_participant(user, snapshot.participant)


def can_manager_rate(user: User, snapshot: AppraisalKRASnapshot) -> bool:
    return can_manager_rate_participant(user, snapshot.participant)
