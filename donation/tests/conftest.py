import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from donation.models import Donor, Hospital, User

PASSWORD = 'Str0ng-Passw0rd!'

ATLANTA = (33.7490, -84.3880)


@pytest.fixture(autouse=True)
def _clear_cache():
    # throttle counters and geocode results live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


def make_user(email, role, **extra):
    return User.objects.create_user(username=email, email=email, password=PASSWORD, role=role, **extra)


@pytest.fixture
def hospital_user(db):
    u = make_user('grady@example.com', User.ROLE_HOSPITAL)
    Hospital.objects.create(user=u, name='Grady', address='80 Jesse Hill Jr Dr SE', city='Atlanta',
                            state='GA', zip_code='30303', latitude=ATLANTA[0], longitude=ATLANTA[1])
    return u


@pytest.fixture
def donor_user(db):
    u = make_user('donor@example.com', User.ROLE_DONOR)
    Donor.objects.create(user=u, first_name='Ada', last_name='Lee', blood_type='O+',
                         latitude=ATLANTA[0] + 0.01, longitude=ATLANTA[1])
    return u


@pytest.fixture
def as_user(api_client):
    def _as(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _as
