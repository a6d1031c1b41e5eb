"""
URL configuration for the ward project.

Patient pages, login/logout and the JSON read API come from the ward app.
The Django admin site is mounted under ``/console/`` so that ``/admin/``
stays free for the patient administration routes.  Prometheus metrics are
exposed at ``/metrics``.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django admin site for managing users, roles and patients
    path('console/', admin.site.urls),
    path('', include('django_prometheus.urls')),
    path('', include('ward.routers')),
]

handler403 = 'ward.views.patients.not_authorized'
