"""
core/urls.py
────────────
Dashboard, reports, branches and settings.
Included from the root urls.py with:
    path('', include('core.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('',           views.home_view,      name='home'),
    path('dashboard/', views.dashboard_view, name='dashboard'),
    path('reports/',   views.reports_view,   name='reports'),
    path('settings/',  views.settings_view,  name='settings'),

    path('branches/',                        views.branch_list_view,   name='branch_list'),
    path('branches/new/',                    views.branch_create_view, name='branch_create'),
    path('branches/<int:branch_id>/edit/',   views.branch_edit_view,   name='branch_edit'),
    path('branches/<int:branch_id>/delete/', views.branch_delete_view, name='branch_delete'),
]
