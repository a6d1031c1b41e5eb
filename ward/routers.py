"""
URL mappings for the ward application.

Paths deliberately omit trailing slashes.  Which role may reach each path
is decided by ``ward.permissions.ACCESS_RULES``, not here.
"""
from django.contrib.auth import views as auth_views
from django.urls import path

from .views import api, health, patients

urlpatterns = [
    path('', patients.home, name='home'),
    path('user/index', patients.index, name='patient_index'),
    path('admin/delete', patients.delete, name='patient_delete'),
    path('admin/formPatients', patients.form_patients, name='patient_form'),
    path('admin/save', patients.save, name='patient_save'),
    path('admin/editPatient', patients.edit_patient, name='patient_edit'),
    path('notAuthorized', patients.not_authorized, name='not_authorized'),
    path('login', auth_views.LoginView.as_view(
        template_name='ward/login.html',
        redirect_authenticated_user=True,
    ), name='login'),
    path('logout', auth_views.LogoutView.as_view(), name='logout'),
    path('api/patients', api.list_patients, name='api_patients'),
    path('api/healthz', health.healthz, name='healthz'),
]
