# hr/models/job_responsibility.py
# ربط المسؤوليات بالوظيفة مع الوزن ونمط التقييم + KRAs الخاصة بالوظيفة.
# محرك التقييم يقرأ هذه الجداول فقط ولا يعدّلها (باستثناء إعادة توزيع الأوزان).
from django.db import models
from django.db.models import F
from django.utils import timezone
from base.models.mixins import CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin
from base.models.managers import CompanyScopeManager, CompanyScopeQuerySet


class JobResponsibilityQuerySet(CompanyScopeQuerySet):
    def effective(self):
        """Currently effective links: no end date."""
        return self.filter(end_date__isnull=True)

    def for_job(self, job_id, company_id):
        return (
            self.for_company(company_id)
            .filter(job_id=job_id)
            .effective()
            .select_related("responsibility")
            .order_by("id")
        )


class JobResponsibility(CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin):
    class AssessmentMode(models.TextChoices):
        AUTO = "auto", "Auto"
        KRA_BASED = "kra_based", "KRA Based"
        HYBRID = "hybrid", "Hybrid"
        RESPONSIBILITY_ONLY = "responsibility_only", "Responsibility Only"

    job = models.ForeignKey("hr.Job", on_delete=models.CASCADE, related_name="job_responsibilities")
    responsibility = models.ForeignKey("hr.Responsibility", on_delete=models.PROTECT, related_name="job_links")

    # حصة المسؤولية من الوظيفة؛ مجموع الأشقاء = 100
    weighting = models.PositiveSmallIntegerField(default=0, help_text="0..100 share of the job")
    assessment_mode = models.CharField(
        max_length=24, choices=AssessmentMode.choices, default=AssessmentMode.AUTO
    )

    start_date = models.DateField(default=timezone.localdate)
    end_date = models.DateField(null=True, blank=True, db_index=True)
    notes = models.TextField(blank=True)

    company_dependent_relations = ("job", "responsibility")

    objects = CompanyScopeManager.from_queryset(JobResponsibilityQuerySet)()

    class Meta:
        db_table = "job_responsibilities"
        ordering = ["job", "id"]
        indexes = [
            models.Index(fields=["company", "job", "end_date"], name="job_resp_company_job_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(weighting__lte=100), name="chk_job_resp_weighting_0_100"),
            models.UniqueConstraint(
                fields=["job", "responsibility"],
                condition=models.Q(end_date__isnull=True),
                name="uniq_effective_job_responsibility",
            ),
        ]

    def __str__(self):
        return f"{self.job.name} · {self.responsibility.name} ({self.weighting}%)"


class JobResponsibilityKRAQuerySet(CompanyScopeQuerySet):
    def enumerated(self):
        """Job KRA array order: explicit sequence first, then creation order."""
        return self.order_by(F("sequence_order").asc(nulls_last=True), "id")


class JobResponsibilityKRA(CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin):
    """
    Job-specific KRA: specializes a base KRA for one job's responsibility,
    or stands alone when responsibility_kra is empty.
    Empty text fields fall back to the linked base KRA when snapshotted.
    """
    job_responsibility = models.ForeignKey(
        "hr.JobResponsibility", on_delete=models.CASCADE, related_name="kras"
    )
    responsibility_kra = models.ForeignKey(
        "hr.ResponsibilityKRA", null=True, blank=True, on_delete=models.SET_NULL, related_name="job_overrides"
    )

    name = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    job_specific_target = models.CharField(max_length=255, blank=True)
    measurement_method = models.CharField(max_length=255, blank=True)

    weight = models.PositiveSmallIntegerField(default=0, help_text="0..100 share of the responsibility")
    sequence_order = models.PositiveIntegerField(null=True, blank=True)

    company_dependent_relations = ("job_responsibility", "responsibility_kra")

    objects = CompanyScopeManager.from_queryset(JobResponsibilityKRAQuerySet)()

    class Meta:
        db_table = "job_responsibility_kras"
        ordering = ["job_responsibility", "id"]
        indexes = [
            models.Index(fields=["company", "job_responsibility"], name="job_kra_company_jr_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(weight__lte=100), name="chk_job_kra_weight_0_100"),
        ]

    def __str__(self):
        label = self.name or (self.responsibility_kra.name if self.responsibility_kra_id else "KRA")
        return f"{label} ({self.weight}%)"
