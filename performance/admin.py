# performance/admin.py
"""
لوحة الإدارة: مستثناة من سكوب الشركات عبر AppAdmin (مثل بقية التطبيقات).
"""

from django.contrib import admin, messages
from base.admin_mixins import AppAdmin

from performance.models import AppraisalKRASnapshot, AppraisalParticipant
from performance.services.kra_snapshots import populate_kra_snapshots


@admin.action(description="Populate KRA snapshots")
def action_populate_kra_snapshots(modeladmin, request, queryset):
    for participant in queryset:
        result = populate_kra_snapshots(participant.id, participant.job_id, participant.company_id)
        if result.error:
            messages.error(request, f"{participant}: {result.error}")
        else:
            messages.success(
                request, f"{participant}: {result.populated} new snapshot(s), {result.skipped} already present."
            )


# -------- Inlines --------
class KRASnapshotInline(admin.TabularInline):
    model = AppraisalKRASnapshot
    extra = 0
    can_delete = False
    fields = ["name", "weight", "sequence_order", "status", "self_rating", "manager_rating",
              "calculated_score", "final_score", "weight_adjusted_score"]
    readonly_fields = fields
    ordering = ["responsibility", "sequence_order", "id"]
    def has_add_permission(self, *a, **kw): return False


@admin.register(AppraisalParticipant)
class AppraisalParticipantAdmin(AppAdmin):
    list_display = ("employee", "job", "cycle_name", "status", "responsibility_score", "company")
    list_filter = ("company", "status", "cycle_name")
    search_fields = ("employee__name", "cycle_name")
    raw_id_fields = ("employee", "job", "evaluator")
    readonly_fields = ("responsibility_score", "finalized_at")
    inlines = [KRASnapshotInline]
    actions = [action_populate_kra_snapshots]


@admin.register(AppraisalKRASnapshot)
class AppraisalKRASnapshotAdmin(AppAdmin):
    list_display = ("participant", "responsibility", "name", "weight", "status", "final_score")
    list_filter = ("company", "status")
    search_fields = ("name", "participant__employee__name", "snapshot_key")
    raw_id_fields = ("manager",)

    # المحتوى المنسوخ لا يُعدَّل بعد الإنشاء؛ الدرجات تُحسب من خدمة التقييم فقط
    def get_readonly_fields(self, request, obj=None):
        computed = ("calculated_score", "final_score", "weight_adjusted_score")
        if obj is None:
            return computed
        return AppraisalKRASnapshot.SNAPSHOT_FIELDS + computed
