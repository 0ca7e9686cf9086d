# performance/signals/participants.py
import logging

from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

from performance.models import AppraisalParticipant
from performance.services.kra_snapshots import populate_kra_snapshots

logger = logging.getLogger(__name__)


@receiver(post_save, sender=AppraisalParticipant)
def populate_snapshots_on_enrolment(sender, instance, created, raw=False, **kwargs):
    """Snapshot the job's KRAs as soon as a participant is enrolled (fixtures excluded)."""
    if not created or raw:
        return
    if not getattr(settings, "APPRAISAL_AUTO_POPULATE_KRAS", False):
        return

    # بعد تأكيد المعاملة حتى يرى المُنشئ المشارك محفوظًا
    def _run():
        result = populate_kra_snapshots(instance.pk, instance.job_id, instance.company_id)
        if result.error:
            logger.error("Auto-population failed for participant %s: %s", instance.pk, result.error)

    transaction.on_commit(_run)
