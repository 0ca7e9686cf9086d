# base/admin.py
# ============================================================
# Django Admin: company scope is relaxed inside admin (Odoo-like)
# ------------------------------------------------------------
# ملاحظة: نستخدم Mixin لإلغاء سكوب الشركات في الأدمن فقط، كي يرى المدير
# كل السجلات + كل الخيارات داخل القوائم (FK/M2M) بدون قيود الشركة.
# ============================================================

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from base.admin_mixins import AppAdmin, HideAuditFieldsMixin, UnscopedAdminMixin
from . import models


@admin.register(models.Company)
class CompanyAdmin(AppAdmin):
    list_display = ("id", "name", "email", "sequence", "active")
    list_filter = ("active",)
    search_fields = ("name", "email")
    ordering = ("sequence", "name")


User = get_user_model()


@admin.register(User)
class UserAdmin(UnscopedAdminMixin, HideAuditFieldsMixin, DjangoUserAdmin):
    """
    User admin with unscoped queries and M2M 'companies' via autocomplete.
    """
    list_display = ("id", "display_name", "email", "company", "is_active", "is_staff", "is_superuser")
    list_filter = ("is_active", "is_staff", "is_superuser", "company")
    search_fields = ("email", "username", "first_name", "last_name")
    list_select_related = ("company",)
    ordering = ("-date_joined",)
    autocomplete_fields = ("company", "companies")
    readonly_fields = ("last_login", "date_joined")

    # المجموعات (عناوين بالإنجليزية فقط؛ التعليقات بالعربية)
    fieldsets = (
        ("Identity", {"fields": ("email", "username", "password")}),  # الهوية
        ("Profile", {"fields": ("first_name", "last_name")}),  # الملف
        ("Company", {"fields": ("company", "companies")}),  # الشركات (افتراضية + مسموح بها)
        ("Status", {  # الحالة والصلاحيات
            "fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")
        }),
        ("Timestamps", {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": (
                "email", "username", "password1", "password2",
                "company", "companies", "is_staff", "is_superuser",
            ),
        }),
    )
