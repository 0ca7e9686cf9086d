from django.db import models
from django.db.models import F
from base.models.mixins import CompanyOwnedMixin, ActivableMixin, TimeStampedMixin, UserStampedMixin
from base.models.managers import CompanyScopeManager, CompanyScopeQuerySet


class Responsibility(CompanyOwnedMixin, ActivableMixin, TimeStampedMixin, UserStampedMixin):
    """
    Catalog entry for a job duty (e.g. "Sales Targets").
    The base KRA library hangs off this record and is reused by every job
    that links the responsibility.
    """
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=64, blank=True)

    class Meta:
        db_table = "responsibilities"
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(fields=["company", "name"], name="uniq_responsibility_company_name"),
        ]

    def __str__(self):
        return self.name


class ResponsibilityKRAQuerySet(CompanyScopeQuerySet):
    def library_for(self, responsibility_id, company_id):
        """Active base KRAs of one responsibility, in library sequence."""
        return (
            self.for_company(company_id)
            .filter(responsibility_id=responsibility_id, is_active=True)
            .order_by(F("sequence_order").asc(nulls_last=True), "id")
        )


class ResponsibilityKRA(CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin):
    """
    Base/library KRA: generic, reusable across jobs.
    weights of the KRAs under one responsibility are expected to total 100.
    """
    responsibility = models.ForeignKey("hr.Responsibility", on_delete=models.CASCADE, related_name="kras")

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    target_metric = models.CharField(max_length=255, blank=True)
    measurement_method = models.CharField(max_length=255, blank=True)

    weight = models.PositiveSmallIntegerField(default=0, help_text="0..100 share of the responsibility")
    sequence_order = models.PositiveIntegerField(null=True, blank=True)
    is_active = models.BooleanField(default=True, db_index=True)

    company_dependent_relations = ("responsibility",)

    objects = CompanyScopeManager.from_queryset(ResponsibilityKRAQuerySet)()

    class Meta:
        db_table = "responsibility_kras"
        ordering = ["responsibility", "id"]
        indexes = [
            models.Index(fields=["company", "responsibility", "is_active"], name="resp_kra_company_resp_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=models.Q(weight__lte=100), name="chk_resp_kra_weight_0_100"),
        ]

    def __str__(self):
        return f"{self.responsibility.name}: {self.name} ({self.weight}%)"
