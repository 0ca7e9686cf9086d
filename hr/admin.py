# hr/admin.py
# ============================================================
# Django Admin (HR): عرض غير مقيّد داخل لوحة الإدارة (Odoo-like)
#
# - نستخدم Mixin لإلغاء سكوب الشركات داخل الأدمن فقط.
# - إعادة توزيع الأوزان تمر عبر خدمات performance (كتابة ذرّية).
# ============================================================

from __future__ import annotations

from django.contrib import admin, messages
from django.core.exceptions import ObjectDoesNotExist, ValidationError

from base.admin_mixins import AppAdmin
from . import models


# ------------------------------------------------------------
# Actions
# ------------------------------------------------------------
@admin.action(description="Distribute responsibility weights evenly")
def action_distribute_responsibility_weights(modeladmin, request, queryset):
    # استيراد محلي لتجنب الدوران بين hr و performance
    from performance.services.assessment import error_message
    from performance.services.weights import distribute_responsibility_weights

    for job in queryset:
        try:
            weights = distribute_responsibility_weights(job.id, job.company_id)
        except (ValidationError, ObjectDoesNotExist) as exc:
            messages.error(request, f"{job.name}: {error_message(exc)}")
            continue
        messages.success(request, f"{job.name}: weights set to {weights}.")


@admin.action(description="Distribute KRA weights evenly")
def action_distribute_kra_weights(modeladmin, request, queryset):
    from performance.services.assessment import error_message
    from performance.services.weights import distribute_kra_weights

    for link in queryset:
        try:
            weights = distribute_kra_weights(link.id, link.company_id)
        except (ValidationError, ObjectDoesNotExist) as exc:
            messages.error(request, f"{link}: {error_message(exc)}")
            continue
        messages.success(request, f"{link}: KRA weights set to {weights}.")


@admin.action(description="Validate job weights")
def action_validate_job_weights(modeladmin, request, queryset):
    from performance.services.weights import validate_job_weights

    for job in queryset:
        report = validate_job_weights(job.id, job.company_id)
        if report.status == "valid":
            messages.success(request, f"{job.name}: weights are valid.")
        else:
            level = messages.ERROR if report.status == "error" else messages.WARNING
            messages.add_message(request, level, f"{job.name}: {' '.join(report.issues)}")


# ------------------------------------------------------------
# Inlines
# ------------------------------------------------------------
class JobResponsibilityInline(admin.TabularInline):
    model = models.JobResponsibility
    extra = 0
    fields = ["responsibility", "weighting", "assessment_mode", "start_date", "end_date"]
    raw_id_fields = ["responsibility"]
    fk_name = "job"


class ResponsibilityKRAInline(admin.TabularInline):
    model = models.ResponsibilityKRA
    extra = 0
    fields = ["name", "target_metric", "measurement_method", "weight", "sequence_order", "is_active"]


class JobResponsibilityKRAInline(admin.TabularInline):
    model = models.JobResponsibilityKRA
    extra = 0
    fields = ["responsibility_kra", "name", "job_specific_target", "measurement_method", "weight", "sequence_order"]
    raw_id_fields = ["responsibility_kra"]


# ------------------------------------------------------------
# Job / Employee
# ------------------------------------------------------------
@admin.register(models.Job)
class JobAdmin(AppAdmin):
    list_display = ("name", "company", "active", "sequence")
    list_filter = ("company", "active")
    search_fields = ("name",)
    ordering = ("sequence", "name")
    inlines = [JobResponsibilityInline]
    actions = [action_validate_job_weights, action_distribute_responsibility_weights]


@admin.register(models.Employee)
class EmployeeAdmin(AppAdmin):
    list_display = ("name", "company", "job", "manager", "user", "active")
    list_filter = ("company", "active")
    search_fields = ("name", "work_email")
    raw_id_fields = ("user", "job", "manager")


# ------------------------------------------------------------
# Responsibilities & KRA library
# ------------------------------------------------------------
@admin.register(models.Responsibility)
class ResponsibilityAdmin(AppAdmin):
    list_display = ("name", "category", "company", "active")
    list_filter = ("company", "active", "category")
    search_fields = ("name",)
    inlines = [ResponsibilityKRAInline]


@admin.register(models.JobResponsibility)
class JobResponsibilityAdmin(AppAdmin):
    list_display = ("job", "responsibility", "weighting", "assessment_mode", "end_date")
    list_filter = ("company", "assessment_mode")
    search_fields = ("job__name", "responsibility__name")
    raw_id_fields = ("job", "responsibility")
    inlines = [JobResponsibilityKRAInline]
    actions = [action_distribute_kra_weights]
