import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from donation.models import AuditEvent, Donor, Hospital, User

from .conftest import PASSWORD, make_user

pytestmark = pytest.mark.django_db


def signup(client, email, role, password=PASSWORD):
    return client.post(reverse('auth-signup'), {'email': email, 'password': password, 'role': role}, format='json')


def test_signup_creates_user_and_empty_profile():
    client = APIClient()
    r = signup(client, 'New@Example.com', 'hospital')
    assert r.status_code == 201
    assert r.data['token'] and r.data['refresh']
    assert r.data['user']['email'] == 'new@example.com'
    assert r.data['user']['role'] == 'hospital'
    assert r.data['user']['profileCompleted'] is False
    hospital = Hospital.objects.get(user__email='new@example.com')
    assert hospital.name == 'New Hospital Center'


def test_signup_donor_creates_donor_row():
    r = signup(APIClient(), 'd@example.com', 'donor')
    assert r.status_code == 201
    assert Donor.objects.filter(user_id=r.data['user']['id']).exists()


def test_signup_duplicate_email_is_rejected():
    client = APIClient()
    assert signup(client, 'dup@example.com', 'donor').status_code == 201
    r = signup(client, 'dup@example.com', 'donor')
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert r.data['error']['code'] == 'bad_request'


def test_signup_rejects_admin_role_and_weak_password():
    client = APIClient()
    assert signup(client, 'a@example.com', 'admin').status_code == 400
    assert signup(client, 'b@example.com', 'donor', password='123').status_code == 400
    assert not User.objects.filter(email__in=['a@example.com', 'b@example.com']).exists()


def test_login_returns_bearer_token_that_authenticates():
    client = APIClient()
    u = make_user('login@example.com', User.ROLE_DONOR)
    Donor.objects.create(user=u, first_name='Ada')
    r = client.post(reverse('auth-login'), {'email': 'login@example.com', 'password': PASSWORD}, format='json')
    assert r.status_code == 200
    assert r.data['user']['id'] == u.id

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['token']}")
    profile = client.get(reverse('donor-profile'))
    assert profile.status_code == 200
    assert profile.data['first_name'] == 'Ada'


def test_login_wrong_password_or_role_is_401():
    client = APIClient()
    make_user('x@example.com', User.ROLE_DONOR)
    r = client.post(reverse('auth-login'), {'email': 'x@example.com', 'password': 'nope'}, format='json')
    assert r.status_code == 401
    r = client.post(reverse('auth-login'),
                    {'email': 'x@example.com', 'password': PASSWORD, 'role': 'hospital'}, format='json')
    assert r.status_code == 401
    assert r.data['error']['code'] == 'unauthorized'
    failures = AuditEvent.objects.filter(action='login', user=None)
    assert failures.count() == 2
    assert failures.first().detail['email'] == 'x@example.com'


def test_legacy_token_prefix_is_not_accepted():
    u = make_user('legacy@example.com', User.ROLE_DONOR)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer jwt-token-{u.id}')
    assert client.get(reverse('donor-profile')).status_code == 401


def test_missing_credentials_is_401():
    assert APIClient().get(reverse('donor-profile')).status_code == 401


def test_refresh_and_logout_blacklists_token():
    client = APIClient()
    make_user('r@example.com', User.ROLE_DONOR)
    login = client.post(reverse('auth-login'), {'email': 'r@example.com', 'password': PASSWORD}, format='json')
    refresh = login.data['refresh']

    r = client.post(reverse('auth-refresh'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert r.data['token']

    client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['token']}")
    r = client.post(reverse('auth-logout'), {'refresh': refresh}, format='json')
    assert r.status_code == 200
    assert r.data['blacklisted'] == 1

    r = client.post(reverse('auth-refresh'), {'refresh': refresh}, format='json')
    assert r.status_code == 401


def test_role_permissions_are_enforced(as_user, donor_user, hospital_user):
    assert as_user(donor_user).get(reverse('hospital-nearby-donors')).status_code == 403
    assert as_user(hospital_user).get(reverse('donor-profile')).status_code == 403


def test_healthz(api_client):
    r = api_client.get(reverse('healthz'))
    assert r.status_code == 200
    assert r.json()['db'] is True
    assert api_client.get(reverse('health')).status_code == 200
