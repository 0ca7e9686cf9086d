# base/models/managers.py
# مدير يقيّد الاستعلام افتراضيًا بـ company_id = current_company، ويتيح إلغاء التقييد عند الحاجة.
from django.db import models
from ..company_context import get_company_id


class CompanyScopeQuerySet(models.QuerySet):
    def _apply_company_scope(self):
        cid = get_company_id()
        if cid is None:
            return self
        return self.filter(company_id=cid)

    def for_company(self, company_id):
        """تقييد صريح بشركة محددة (أساس for_job / library_for / for_participant)."""
        return self.filter(company_id=company_id)


class CompanyScopeManager(models.Manager.from_queryset(CompanyScopeQuerySet)):

    def get_queryset(self):
        qs = super().get_queryset()
        return qs._apply_company_scope()

    # للوصول بدون أي تقييد (حذر!)
    def all_companies(self):
        return super().get_queryset()
