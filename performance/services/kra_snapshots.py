# performance/services/kra_snapshots.py
# ============================================================
# KRA Snapshot Populator
# - ينسخ تعريفات KRA إلى سجلات مجمّدة لكل مشارك في التقييم
# - idempotent: المفتاح (participant, snapshot_key) لا يُنشأ مرتين
# - كل الاستدعاء وحدة عمل واحدة: إما كل الدفعة أو لا شيء
# ============================================================
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.db import DatabaseError, transaction
from django.db.models import Prefetch

from hr.models import Job, JobResponsibility, JobResponsibilityKRA, ResponsibilityKRA
from performance.exceptions import JobNotFound, ParticipantFinalized, ParticipantNotFound
from performance.models import AppraisalKRASnapshot, AppraisalParticipant
from performance.services.assessment import (
    Mode,
    SOURCE_KRA_ID_CHAIN,
    error_message,
    resolve_assessment_mode,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PopulateResult:
    populated: int = 0
    skipped: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ------------------------------------------------------------
# Snapshot builders
# ------------------------------------------------------------

def _from_job_kra(participant, link, job_kra: JobResponsibilityKRA, sequence_order: int) -> AppraisalKRASnapshot:
    # محتوى KRA الخاص بالوظيفة أولًا، ثم KRA المكتبة المرتبط
    base = job_kra.responsibility_kra
    kind, source_id = SOURCE_KRA_ID_CHAIN.resolve(job_kra)
    return AppraisalKRASnapshot(
        company_id=participant.company_id,
        participant=participant,
        responsibility_id=link.responsibility_id,
        source_kra_id=job_kra.responsibility_kra_id,
        job_kra_id=job_kra.id,
        snapshot_key=AppraisalKRASnapshot.build_key(link.responsibility_id, kind, source_id),
        name=job_kra.name or (base.name if base else ""),
        description=job_kra.description or (base.description if base else ""),
        target_metric=job_kra.job_specific_target or (base.target_metric if base else ""),
        measurement_method=job_kra.measurement_method or (base.measurement_method if base else ""),
        weight=job_kra.weight,
        sequence_order=sequence_order,
        status=AppraisalKRASnapshot.Status.PENDING,
        evidence_urls=[],
    )


def _from_library_kra(participant, link, kra: ResponsibilityKRA, sequence_order: int) -> AppraisalKRASnapshot:
    return AppraisalKRASnapshot(
        company_id=participant.company_id,
        participant=participant,
        responsibility_id=link.responsibility_id,
        source_kra_id=kra.id,
        snapshot_key=AppraisalKRASnapshot.build_key(link.responsibility_id, "kra", kra.id),
        name=kra.name,
        description=kra.description,
        target_metric=kra.target_metric,
        measurement_method=kra.measurement_method,
        weight=kra.weight,
        sequence_order=sequence_order,
        status=AppraisalKRASnapshot.Status.PENDING,
        evidence_urls=[],
    )


def _sequenced(kras):
    """
    Pair each KRA with its snapshot sequence_order.
    kras come sequenced-first (nulls last), so an unsequenced KRA takes the
    highest number handed out so far + 1 and never repeats an explicit one.
    Numbering runs over the full enumeration (not the new-only batch),
    so re-runs never shift existing sequence numbers.
    """
    last = 0
    for kra in kras:
        seq = kra.sequence_order if kra.sequence_order is not None else last + 1
        last = max(last, seq)
        yield kra, seq


def _candidates(participant, link, company_id) -> Iterable[AppraisalKRASnapshot]:
    """Snapshots a responsibility would produce, in enumeration order."""
    job_kras = list(link.kras.all())
    if job_kras:
        for job_kra, seq in _sequenced(job_kras):
            yield _from_job_kra(participant, link, job_kra, seq)
        return

    library = ResponsibilityKRA.objects.all_companies().library_for(link.responsibility_id, company_id)
    for kra, seq in _sequenced(library):
        yield _from_library_kra(participant, link, kra, seq)


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------

def _populate(participant_id, job_id, company_id):
    participant = (
        AppraisalParticipant.objects.all_companies()
        .select_for_update()
        .filter(company_id=company_id, pk=participant_id)
        .first()
    )
    if participant is None:
        raise ParticipantNotFound(f"Participant {participant_id} not found in company {company_id}.")
    if participant.is_finalized:
        raise ParticipantFinalized("Participant is finalized; KRA snapshots are read-only.")
    if not Job.all_objects.filter(company_id=company_id, pk=job_id).exists():
        raise JobNotFound(f"Job {job_id} not found in company {company_id}.")

    links = (
        JobResponsibility.objects.all_companies()
        .for_job(job_id, company_id)
        .prefetch_related(
            Prefetch(
                "kras",
                queryset=(
                    JobResponsibilityKRA.objects.all_companies()
                    .filter(company_id=company_id)
                    .enumerated()
                    .select_related("responsibility_kra")
                ),
            )
        )
    )

    # حارس idempotency: المفاتيح الموجودة مسبقًا لهذا المشارك
    existing = AppraisalKRASnapshot.objects.all_companies().existing_keys(participant_id, company_id)

    new_rows: List[AppraisalKRASnapshot] = []
    batch_keys = set()
    skipped = 0
    for link in links:
        mode = resolve_assessment_mode(link.assessment_mode, bool(link.kras.all()))
        if mode == Mode.RESPONSIBILITY_ONLY:
            continue
        for snapshot in _candidates(participant, link, company_id):
            key = snapshot.snapshot_key
            if key in batch_keys:
                # أكثر من KRA وظيفي يشير لنفس KRA المكتبة: الأول فقط يُنسخ
                logger.warning(
                    "Job KRA %s duplicates snapshot key %s for participant %s; not snapshotted.",
                    snapshot.job_kra_id, key, participant_id,
                )
                continue
            batch_keys.add(key)
            if key in existing:
                skipped += 1
                continue
            new_rows.append(snapshot)

    # دفعة واحدة؛ أي تعارض مع القيد الفريد يُلغي كل الاستدعاء
    AppraisalKRASnapshot.objects.all_companies().bulk_create(new_rows)
    return len(new_rows), skipped


def populate_kra_snapshots(participant_id, job_id, company_id) -> PopulateResult:
    """
    Create the missing KRA snapshots of one participant for one job.
    Failures are reported on the result, never raised; nothing is written on failure.
    """
    try:
        with transaction.atomic():
            populated, skipped = _populate(participant_id, job_id, company_id)
    except (ValidationError, ObjectDoesNotExist, DatabaseError) as exc:
        logger.warning(
            "KRA snapshot population failed for participant %s (job %s, company %s): %s",
            participant_id, job_id, company_id, exc,
        )
        return PopulateResult(error=error_message(exc))

    logger.info(
        "Populated KRA snapshots for participant %s: %s new, %s existing",
        participant_id, populated, skipped,
    )
    return PopulateResult(populated=populated, skipped=skipped)


def populate_participants_for_job(job_id, company_id) -> Dict[int, PopulateResult]:
    """Re-run population for every active participant of a job (refresh after mid-cycle job edits)."""
    participant_ids = (
        AppraisalParticipant.all_objects
        .filter(company_id=company_id, job_id=job_id, status=AppraisalParticipant.Status.ACTIVE)
        .order_by("id")
        .values_list("id", flat=True)
    )
    return {pid: populate_kra_snapshots(pid, job_id, company_id) for pid in participant_ids}
