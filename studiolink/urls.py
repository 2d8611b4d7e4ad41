"""
URL configuration for the studiolink project.

The social procedures live under /api/ (see social/urls.py).
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("social.urls")),
]
