from django.db import models
from base.models.mixins import CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin


class Job(CompanyOwnedMixin, TimeStampedMixin, UserStampedMixin, models.Model):
    """
    Odoo-like hr.job.
    هيكل الوظيفة (المسؤوليات + KRAs) يُقرأ من JobResponsibility ولا يعدّله محرك التقييم.
    """
    active = models.BooleanField(default=True)
    name = models.CharField(max_length=255, db_index=True)
    sequence = models.IntegerField(default=10)
    description = models.TextField(blank=True)

    class Meta:
        db_table = "hr_job"
        indexes = [
            models.Index(fields=["company", "active"], name="hr_job_company_active_idx"),
        ]
        constraints = [
            models.UniqueConstraint(fields=["name", "company"], name="uniq_job_name_company"),
        ]

    def __str__(self):
        return self.name
