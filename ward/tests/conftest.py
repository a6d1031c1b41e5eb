import pytest
from django.test import Client

from ward.models import AppRole, AppUser, Patient

PASSWORD = '1234'


@pytest.fixture
def roles(db):
    return {name: AppRole.objects.create(name=name) for name in ('USER', 'ADMIN')}


@pytest.fixture
def admin_account(roles):
    u = AppUser.objects.create_user('admin', PASSWORD)
    u.roles.add(roles['ADMIN'])
    return u


@pytest.fixture
def user_account(roles):
    u = AppUser.objects.create_user('user2', PASSWORD)
    u.roles.add(roles['USER'])
    return u


@pytest.fixture
def admin_http(admin_account):
    c = Client()
    c.force_login(admin_account)
    return c


@pytest.fixture
def user_http(user_account):
    c = Client()
    c.force_login(user_account)
    return c


@pytest.fixture
def make_patients(db):
    def make(*names, score=10):
        return [Patient.objects.create(name=n, score=score) for n in names]
    return make
