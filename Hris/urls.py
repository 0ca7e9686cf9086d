"""
URL configuration for Hris project.

The engine is consumed in-process by the appraisal lifecycle; only the admin
is routed here.
"""
# Hris/urls.py
from django.contrib import admin
from django.urls import path

urlpatterns = [
    # لوحة الإدارة
    path("admin/", admin.site.urls),
]
