# performance/services/weights.py
# ============================================================
# Weight Validator
# - فحص مجموع أوزان المسؤوليات للوظيفة (= 100)
# - فحص مجموع أوزان KRAs داخل كل مسؤولية تتطلب تقييم KRA (= 100)
# - إصلاح: توزيع متساوٍ بكتابة ذرّية (كل شيء أو لا شيء)
# ============================================================
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from django.db import transaction
from django.db.models import Count, IntegerField, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from hr.models import Job, JobResponsibility, JobResponsibilityKRA
from performance.exceptions import JobNotFound, WeightDistributionError
from performance.services.assessment import mode_requires_kras, resolve_assessment_mode

logger = logging.getLogger(__name__)

FULL_WEIGHT = 100


# ============================================================
# Data Contracts
# ============================================================

@dataclass(frozen=True)
class ResponsibilityWeightCheck:
    responsibility_id: int
    job_responsibility_id: int
    name: str
    weighting: int
    effective_mode: str
    kra_count: int
    kra_weight_total: int
    needs_kras: bool
    is_valid: bool


@dataclass
class JobWeightValidation:
    job_id: int
    responsibility_weight_total: int
    is_responsibility_weight_valid: bool
    per_responsibility: List[ResponsibilityWeightCheck]
    is_fully_valid: bool
    issues: List[str] = field(default_factory=list)
    status: str = "valid"  # valid | warning | error

    @property
    def issue_count(self) -> int:
        return len(self.issues)


# ============================================================
# Validation
# ============================================================

def _get_job(job_id, company_id) -> Job:
    job = Job.all_objects.filter(company_id=company_id, pk=job_id).first()
    if job is None:
        raise JobNotFound(f"Job {job_id} not found in company {company_id}.")
    return job


def _duplicate_kra_links(job_responsibility_ids, company_id):
    """Base KRAs linked by more than one job KRA under the same job responsibility."""
    return (
        JobResponsibilityKRA.objects.all_companies()
        .for_company(company_id)
        .filter(job_responsibility_id__in=job_responsibility_ids, responsibility_kra__isnull=False)
        .values("job_responsibility_id", "responsibility_kra_id")
        .annotate(n=Count("id"))
        .filter(n__gt=1)
        .order_by("job_responsibility_id", "responsibility_kra_id")
    )


def validate_job_weights(job_id, company_id) -> JobWeightValidation:
    """
    Per-level weight totals for one job's effective responsibilities.
    Responsibilities without job KRAs, or whose effective mode does not score
    KRAs, are exempt from the KRA total rule.
    A base KRA linked twice under one responsibility is reported as a warning.
    """
    _get_job(job_id, company_id)

    links = (
        JobResponsibility.objects.all_companies()
        .for_job(job_id, company_id)
        .annotate(
            kra_count=Count("kras"),
            kra_weight_total=Coalesce(Sum("kras__weight"), Value(0), output_field=IntegerField()),
        )
    )

    checks: List[ResponsibilityWeightCheck] = []
    for link in links:
        has_kras = link.kra_count > 0
        mode = resolve_assessment_mode(link.assessment_mode, has_kras)
        needs_kras = mode_requires_kras(mode) and has_kras
        checks.append(ResponsibilityWeightCheck(
            responsibility_id=link.responsibility_id,
            job_responsibility_id=link.id,
            name=link.responsibility.name,
            weighting=link.weighting,
            effective_mode=str(mode),
            kra_count=link.kra_count,
            kra_weight_total=int(link.kra_weight_total),
            needs_kras=needs_kras,
            is_valid=(not needs_kras) or int(link.kra_weight_total) == FULL_WEIGHT,
        ))

    total = sum(c.weighting for c in checks)
    total_ok = total == FULL_WEIGHT

    # مستويات المشاكل: error يمنع استخدام الوظيفة في التقييم، warning ينبّه فقط
    errors, warnings = [], []
    if not checks:
        errors.append("At least one responsibility is required.")
    elif not total_ok:
        errors.append(f"Responsibility weights total {total}%, expected {FULL_WEIGHT}%.")
    for c in checks:
        if not c.is_valid:
            warnings.append(f"KRA weights for '{c.name}' total {c.kra_weight_total}%, expected {FULL_WEIGHT}%.")
    names = {c.job_responsibility_id: c.name for c in checks}
    for dup in _duplicate_kra_links(list(names), company_id):
        warnings.append(
            f"'{names[dup['job_responsibility_id']]}' links base KRA #{dup['responsibility_kra_id']} "
            f"{dup['n']} times; only the first is snapshotted."
        )

    status = "error" if errors else ("warning" if warnings else "valid")
    return JobWeightValidation(
        job_id=job_id,
        responsibility_weight_total=total,
        is_responsibility_weight_valid=total_ok,
        per_responsibility=checks,
        is_fully_valid=total_ok and all(c.is_valid for c in checks),
        issues=errors + warnings,
        status=status,
    )


def validate_company_jobs(company_id) -> List[JobWeightValidation]:
    """Validate every active job of a company (inactive jobs are not listed)."""
    job_ids = (
        Job.all_objects.filter(company_id=company_id, active=True)
        .order_by("sequence", "name")
        .values_list("id", flat=True)
    )
    return [validate_job_weights(job_id, company_id) for job_id in job_ids]


# ============================================================
# Repair: even distribution
# ============================================================

def distribute_evenly(items: Sequence) -> List[int]:
    """
    floor(100/N) to every item, +1 to the first (100 mod N) items.
    The result always totals exactly 100.
    """
    n = len(items)
    if n == 0:
        raise WeightDistributionError("Cannot distribute weights over zero items.")
    share, extra = divmod(FULL_WEIGHT, n)
    return [share + (1 if i < extra else 0) for i in range(n)]


def _apply_weights(objs, field_name: str) -> List[int]:
    weights = distribute_evenly(objs)
    now = timezone.now()
    for obj, weight in zip(objs, weights):
        setattr(obj, field_name, weight)
        obj.updated_at = now
    return weights


@transaction.atomic
def distribute_responsibility_weights(job_id, company_id) -> List[int]:
    """Rewrite the weighting of every effective responsibility of a job in one unit of work."""
    _get_job(job_id, company_id)
    links = list(
        JobResponsibility.objects.all_companies()
        .filter(company_id=company_id, job_id=job_id)
        .effective()
        .order_by("id")
        .select_for_update()
    )
    weights = _apply_weights(links, "weighting")
    JobResponsibility.objects.all_companies().bulk_update(links, ["weighting", "updated_at"])
    logger.info("Distributed responsibility weights %s across job %s", weights, job_id)
    return weights


@transaction.atomic
def distribute_kra_weights(job_responsibility_id, company_id) -> List[int]:
    """Rewrite the weight of every job KRA under one job responsibility in one unit of work."""
    exists = (
        JobResponsibility.objects.all_companies()
        .filter(company_id=company_id, pk=job_responsibility_id)
        .exists()
    )
    if not exists:
        raise JobNotFound(f"Job responsibility {job_responsibility_id} not found in company {company_id}.")

    kras = list(
        JobResponsibilityKRA.objects.all_companies()
        .filter(company_id=company_id, job_responsibility_id=job_responsibility_id)
        .enumerated()
        .select_for_update()
    )
    weights = _apply_weights(kras, "weight")
    JobResponsibilityKRA.objects.all_companies().bulk_update(kras, ["weight", "updated_at"])
    logger.info("Distributed KRA weights %s across job responsibility %s", weights, job_responsibility_id)
    return weights
