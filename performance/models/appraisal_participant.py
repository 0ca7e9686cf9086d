from django.db import models
from base.models.mixins import CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin


class AppraisalParticipant(CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin):
    """
    One employee enrolled in one appraisal cycle, appraised against one job.
    KRA snapshots hang off this record; enrolment itself is owned by the
    appraisal lifecycle.
    """
    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        FINALIZED = "finalized", "Finalized"

    employee = models.ForeignKey("hr.Employee", on_delete=models.PROTECT, related_name="appraisal_participations")
    job = models.ForeignKey("hr.Job", on_delete=models.PROTECT, related_name="appraisal_participants")
    evaluator = models.ForeignKey(
        "hr.Employee", null=True, blank=True, on_delete=models.SET_NULL, related_name="appraisals_to_review"
    )

    cycle_name = models.CharField(max_length=255)
    date_start = models.DateField()
    date_end = models.DateField()

    status = models.CharField(max_length=12, choices=Status.choices, default=Status.ACTIVE, db_index=True)

    # المجموع الموزون لمكوّن المسؤوليات (يُخزَّن عند الإقفال)
    responsibility_score = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    finalized_at = models.DateTimeField(null=True, blank=True)

    company_dependent_relations = ("employee", "job", "evaluator")

    class Meta:
        db_table = "perf_appraisal_participant"
        indexes = [
            models.Index(fields=["company", "job", "status"], name="perf_part_company_job_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(date_start__lte=models.F("date_end")), name="chk_participant_dates"),
            models.UniqueConstraint(fields=["employee", "cycle_name"], name="uniq_participant_employee_cycle"),
        ]
        permissions = [
            ("self_rate_participant", "Can submit self ratings for participant"),
            ("manager_rate_participant", "Can submit manager ratings for participant"),
        ]

    def __str__(self):
        return f"{self.employee.name} · {self.cycle_name}"

    @property
    def is_finalized(self) -> bool:
        return self.status == self.Status.FINALIZED
