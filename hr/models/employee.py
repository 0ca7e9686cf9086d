# hr/models/employee.py
from django.db import models
from base.models.mixins import (
    CompanyOwnedMixin,
    TimeStampedMixin,
    UserStampedMixin,
    ActivableMixin,  # يوفر الحقل active افتراضيًا
)


class Employee(CompanyOwnedMixin, ActivableMixin, TimeStampedMixin, UserStampedMixin, models.Model):
    """Odoo-like hr.employee"""

    name = models.CharField(max_length=255, db_index=True)

    user = models.ForeignKey(
        "base.User",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="employees",
    )

    job = models.ForeignKey(
        "hr.Job",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="employee_set",
    )

    manager = models.ForeignKey(
        "self",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="managed_employees"
    )

    work_email = models.EmailField(blank=True)

    # العلاقات التي يجب أن تطابق شركة الموظف
    company_dependent_relations = (
        "job",
        "manager",
    )

    class Meta:
        db_table = "hr_employee"
        indexes = [
            models.Index(fields=["company", "active"], name="hr_employee_company_active_idx"),
        ]

    def __str__(self):
        return self.name
