from django.db import models
from .mixins import TimeStampedMixin, ActivableMixin


class Company(TimeStampedMixin, ActivableMixin):
    """
    Django flavor of Odoo's res.company.
    كل كيانات المحرك تحمل company إلزاميًا؛ الشركة هي حدّ العزل بين المستأجرين.
    """
    name = models.CharField(max_length=255, unique=True)
    sequence = models.PositiveIntegerField(default=10, db_index=True)
    email = models.EmailField(blank=True)

    class Meta:
        db_table = "company"
        indexes = [
            models.Index(fields=["name"], name="company_name_idx"),
        ]

    def __str__(self):
        return self.name
