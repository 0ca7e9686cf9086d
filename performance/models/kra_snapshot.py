from django.db import models
from base.models.mixins import CompanyOwnedMixin, TimeStampedMixin
from base.models.managers import CompanyScopeManager, CompanyScopeQuerySet


class AppraisalKRASnapshotQuerySet(CompanyScopeQuerySet):
    def for_participant(self, participant_id, company_id):
        return self.for_company(company_id).filter(participant_id=participant_id)

    def for_responsibility(self, participant_id, responsibility_id, company_id):
        return self.for_participant(participant_id, company_id).filter(responsibility_id=responsibility_id)

    def existing_keys(self, participant_id, company_id) -> set:
        """Idempotency guard: identity keys already snapshotted for the participant."""
        return set(self.for_participant(participant_id, company_id).values_list("snapshot_key", flat=True))


class AppraisalKRASnapshot(CompanyOwnedMixin, TimeStampedMixin):
    """
    A KRA definition frozen onto one participant at appraisal time.
    - المحتوى (name/description/target/measurement/weight) يُنسخ عند الإنشاء ولا يتغيّر بعده
    - التقييمات والدرجات تتغيّر خلال نافذة التقييم فقط
    """
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        SELF_RATED = "self_rated", "Self Rated"
        MANAGER_RATED = "manager_rated", "Manager Rated"
        COMPLETED = "completed", "Completed"

    # الحقول المنسوخة من مكتبة KRA (للقراءة فقط بعد الإنشاء)
    SNAPSHOT_FIELDS = (
        "participant", "responsibility", "source_kra", "job_kra", "snapshot_key",
        "name", "description", "target_metric", "measurement_method", "weight", "sequence_order",
    )

    participant = models.ForeignKey(
        "performance.AppraisalParticipant", on_delete=models.CASCADE, related_name="kra_snapshots"
    )
    responsibility = models.ForeignKey(
        "hr.Responsibility", on_delete=models.PROTECT, related_name="appraisal_kra_snapshots"
    )

    # provenance
    source_kra = models.ForeignKey(
        "hr.ResponsibilityKRA", null=True, blank=True, on_delete=models.SET_NULL, related_name="appraisal_snapshots"
    )
    job_kra = models.ForeignKey(
        "hr.JobResponsibilityKRA", null=True, blank=True, on_delete=models.SET_NULL, related_name="appraisal_snapshots"
    )
    # "<responsibility_id>-kra:<id>" | "<responsibility_id>-jobkra:<id>"
    snapshot_key = models.CharField(max_length=64)

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    target_metric = models.CharField(max_length=255, blank=True)
    measurement_method = models.CharField(max_length=255, blank=True)
    weight = models.PositiveSmallIntegerField(default=0)
    sequence_order = models.PositiveIntegerField(default=0)

    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING, db_index=True)

    self_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    self_comments = models.TextField(blank=True)
    self_rated_at = models.DateTimeField(null=True, blank=True)

    manager_rating = models.PositiveSmallIntegerField(null=True, blank=True)
    manager_comments = models.TextField(blank=True)
    manager_rated_at = models.DateTimeField(null=True, blank=True)
    manager = models.ForeignKey(
        "hr.Employee", null=True, blank=True, on_delete=models.SET_NULL, related_name="kra_ratings_given"
    )

    calculated_score = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    final_score = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    weight_adjusted_score = models.DecimalField(max_digits=8, decimal_places=4, null=True, blank=True)

    evidence_urls = models.JSONField(default=list, blank=True)

    company_dependent_relations = ("participant", "responsibility", "manager")

    objects = CompanyScopeManager.from_queryset(AppraisalKRASnapshotQuerySet)()

    class Meta:
        db_table = "perf_appraisal_kra_snapshot"
        ordering = ["participant", "responsibility", "sequence_order", "id"]
        indexes = [
            models.Index(fields=["participant", "responsibility"], name="perf_snap_part_resp_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["participant", "snapshot_key"], name="uniq_snapshot_participant_key"),
            models.CheckConstraint(condition=models.Q(weight__lte=100), name="chk_snapshot_weight_0_100"),
        ]

    def __str__(self):
        return f"{self.participant} · {self.name} ({self.weight}%)"

    @staticmethod
    def build_key(responsibility_id, source_kind: str, source_id) -> str:
        return f"{responsibility_id}-{source_kind}:{source_id}"
