"""
Django admin registrations for the ward models.

The admin console (mounted at ``/console/``) is the user-management flow
for accounts and roles: ADMIN role holders can create users, toggle the
``enabled`` flag and edit role assignments there.  Passwords entered in the
user form are hashed before saving.
"""

from django import forms
from django.contrib import admin

from .models import AppRole, AppUser, Patient


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'birth_date', 'sick', 'score')
    list_filter = ('sick',)
    search_fields = ('name',)


@admin.register(AppRole)
class AppRoleAdmin(admin.ModelAdmin):
    list_display = ('name',)
    search_fields = ('name',)


class AppUserForm(forms.ModelForm):
    new_password = forms.CharField(
        label='Password',
        required=False,
        widget=forms.PasswordInput,
        help_text='Leave blank to keep the current password.',
    )

    class Meta:
        model = AppUser
        fields = ('username', 'enabled', 'roles')

    def clean(self):
        cleaned = super().clean()
        if not self.instance.pk and not cleaned.get('new_password'):
            self.add_error('new_password', 'A password is required for new users.')
        return cleaned

    def save(self, commit=True):
        user = super().save(commit=False)
        if self.cleaned_data.get('new_password'):
            user.set_password(self.cleaned_data['new_password'])
        if commit:
            user.save()
            self.save_m2m()
        return user


@admin.register(AppUser)
class AppUserAdmin(admin.ModelAdmin):
    form = AppUserForm
    list_display = ('username', 'enabled', 'role_list', 'last_login')
    list_filter = ('enabled', 'roles')
    search_fields = ('username',)
    filter_horizontal = ('roles',)

    def get_readonly_fields(self, request, obj=None):
        # username is the primary key; renaming would orphan sessions
        return ('username',) if obj else ()

    @admin.display(description='Roles')
    def role_list(self, obj):
        return ', '.join(sorted(obj.role_names()))
