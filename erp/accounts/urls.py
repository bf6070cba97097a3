"""
accounts/urls.py
────────────────
URL patterns for authentication, own profile and the staff screen.
Included from the root urls.py with:
    path('', include('accounts.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('auth/',    views.auth_view,    name='login'),
    path('logout/',  views.logout_view,  name='logout'),
    path('profile/', views.profile_view, name='profile'),

    path('staff/',                          views.staff_list_view,   name='staff_list'),
    path('staff/new/',                      views.staff_create_view, name='staff_create'),
    path('staff/<int:profile_id>/edit/',    views.staff_edit_view,   name='staff_edit'),
    path('staff/<int:profile_id>/toggle/',  views.staff_toggle_view, name='staff_toggle'),
]
