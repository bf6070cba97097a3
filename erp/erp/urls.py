"""
URL configuration for the institute ERP.

  path('', include('core.urls'))       – /, dashboard, reports, branches, settings
  path('', include('accounts.urls'))   – /auth/, logout, profile, staff
  path('', include('academics.urls'))  – students … certificates, /verify/<number>/
  path('', include('finances.urls'))   – receipts
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),
    path('', include('core.urls')),
    path('', include('accounts.urls')),
    path('', include('academics.urls')),
    path('', include('finances.urls')),
]

handler404 = 'core.views.handler404'
handler500 = 'core.views.handler500'
