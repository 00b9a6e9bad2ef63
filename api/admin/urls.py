"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.admin import views

urlpatterns = [
    path("debug", views.AdminDebugView.as_view(), name="admin-debug"),
]
