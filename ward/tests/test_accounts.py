import pytest
from django.contrib.auth import authenticate
from django.core.management import call_command
from django.core.management.base import CommandError

from ward.exceptions import (
    PasswordMismatch,
    RoleAlreadyExists,
    RoleNotFound,
    UserAlreadyExists,
    UserNotFound,
)
from ward.models import AppUser
from ward.services import accounts

pytestmark = pytest.mark.django_db


def test_add_user_stores_hash_not_password():
    u = accounts.add_new_user('nurse1', 's3cret', 's3cret')
    assert u.password != 's3cret'
    assert u.check_password('s3cret')
    assert accounts.find_by_username('nurse1') == u


def test_add_user_rejects_mismatch_and_duplicates():
    with pytest.raises(PasswordMismatch):
        accounts.add_new_user('nurse1', 'a', 'b')
    assert accounts.find_by_username('nurse1') is None
    accounts.add_new_user('nurse1', 'a', 'a')
    with pytest.raises(UserAlreadyExists):
        accounts.add_new_user('nurse1', 'c', 'c')


def test_roles_must_exist_before_assignment():
    accounts.add_new_user('nurse1', 'pw', 'pw')
    with pytest.raises(RoleNotFound):
        accounts.add_role_to_user('nurse1', 'ADMIN')
    accounts.add_new_role('ADMIN')
    with pytest.raises(RoleAlreadyExists):
        accounts.add_new_role('ADMIN')
    user = accounts.add_role_to_user('nurse1', 'ADMIN')
    assert user.role_names() == {'ADMIN'}
    assert user.is_staff
    accounts.remove_role_from_user('nurse1', 'ADMIN')
    assert user.role_names() == set()
    assert not user.is_staff


def test_unknown_user_operations_raise():
    accounts.add_new_role('USER')
    assert accounts.find_by_username('ghost') is None
    with pytest.raises(UserNotFound):
        accounts.load_user_by_username('ghost')
    with pytest.raises(UserNotFound):
        accounts.add_role_to_user('ghost', 'USER')


def test_disabled_user_does_not_authenticate():
    accounts.add_new_user('nurse1', 'pw', 'pw', enabled=False)
    assert authenticate(username='nurse1', password='pw') is None
    accounts.set_enabled('nurse1', True)
    assert authenticate(username='nurse1', password='pw') is not None


def test_create_app_user_command(capsys):
    accounts.add_new_role('USER')
    call_command('create_app_user', 'clerk', '--password', 'pw', '--role', 'USER')
    assert 'ok: clerk' in capsys.readouterr().out
    clerk = AppUser.objects.get(username='clerk')
    assert clerk.enabled and clerk.role_names() == {'USER'}


def test_create_app_user_command_is_atomic():
    with pytest.raises(CommandError, match='not found'):
        call_command('create_app_user', 'clerk', '--password', 'pw', '--role', 'MISSING')
    assert not AppUser.objects.filter(username='clerk').exists()


def test_create_app_user_command_checks_confirmation():
    with pytest.raises(CommandError, match='do not match'):
        call_command('create_app_user', 'clerk', '--password', 'pw', '--confirm-password', 'other')
