"""
Integration tests for the BloodLink API.

These exercise the hospital and donor dashboards end to end: nearby
donor search, urgency requests and the donor responses to them,
appointments, inventory, patients and the admin helpers.  They use
Django REST Framework's APIClient within the APITestCase base class.
"""
from datetime import timedelta

from django.core.cache import cache
from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from ..models import (
    Appointment,
    BloodInventory,
    Donor,
    Hospital,
    PatientRequest,
    UrgencyRequest,
    UrgencyResponse,
    User,
)

ATLANTA = (33.7490, -84.3880)
LOS_ANGELES = (34.0522, -118.2437)


def future(days=3):
    return (timezone.now() + timedelta(days=days)).isoformat()


class BloodLinkAPITests(APITestCase):
    def setUp(self) -> None:
        cache.clear()
        self.hospital_user = User.objects.create_user(
            username='h1@example.com', email='h1@example.com', password='x', role='hospital'
        )
        self.hospital = Hospital.objects.create(
            user=self.hospital_user, name='Grady', address='80 Jesse Hill Jr Dr SE', city='Atlanta',
            state='GA', zip_code='30303', phone_number='404-555-0100',
            latitude=ATLANTA[0], longitude=ATLANTA[1],
        )
        self.other_hospital_user = User.objects.create_user(
            username='h2@example.com', email='h2@example.com', password='x', role='hospital'
        )
        self.other_hospital = Hospital.objects.create(user=self.other_hospital_user, name='Elsewhere')

        self.donor_user = User.objects.create_user(
            username='d1@example.com', email='d1@example.com', password='x', role='donor'
        )
        # ~0.7 miles north of the hospital
        self.donor = Donor.objects.create(
            user=self.donor_user, first_name='Ada', last_name='Lee', blood_type='O+',
            latitude=ATLANTA[0] + 0.01, longitude=ATLANTA[1],
        )
        self.far_donor = self._donor('far@example.com', 'O+', *LOS_ANGELES)
        self.ineligible = self._donor('inel@example.com', 'O+', ATLANTA[0], ATLANTA[1], eligibility_status='ineligible')
        self.no_location = self._donor('noloc@example.com', 'O+', None, None)
        self.a_neg = self._donor('aneg@example.com', 'A-', ATLANTA[0] + 0.02, ATLANTA[1])

        self.admin_user = User.objects.create_user(
            username='admin@example.com', email='admin@example.com', password='x', role='admin'
        )

    def _donor(self, email, blood_type, lat, lon, **extra):
        u = User.objects.create_user(username=email, email=email, password='x', role='donor')
        return Donor.objects.create(user=u, blood_type=blood_type, latitude=lat, longitude=lon, **extra)

    def authenticate(self, user: User) -> APIClient:
        """Return an authenticated APIClient for the given user."""
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    # ------------------------------------------------------------------
    # Nearby donors
    # ------------------------------------------------------------------
    def test_nearby_donors_default_radius(self):
        client = self.authenticate(self.hospital_user)
        response = client.get(reverse('hospital-nearby-donors'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [d['id'] for d in response.data['donors']]
        # eligible and located donors within 5 miles only, nearest first
        self.assertEqual(ids, [self.donor.id, self.a_neg.id])
        self.assertEqual(response.data['totalCount'], 2)
        self.assertEqual(response.data['bloodType'], 'all')
        self.assertEqual(response.data['maxDistance'], 5)
        self.assertEqual(response.data['donors'][0]['distance'], 0.7)
        self.assertEqual(response.data['hospital']['id'], self.hospital.id)

    def test_nearby_donors_blood_type_filter(self):
        client = self.authenticate(self.hospital_user)
        response = client.get(reverse('hospital-nearby-donors'), {'bloodType': 'A-'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([d['id'] for d in response.data['donors']], [self.a_neg.id])
        self.assertEqual(response.data['bloodType'], 'A-')

    def test_nearby_donors_unencoded_plus_in_query(self):
        client = self.authenticate(self.hospital_user)
        response = client.get(reverse('hospital-nearby-donors') + '?bloodType=O+')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['bloodType'], 'O+')
        self.assertEqual([d['id'] for d in response.data['donors']], [self.donor.id])

    def test_nearby_donors_radius_upper_bound(self):
        client = self.authenticate(self.hospital_user)
        response = client.get(reverse('hospital-nearby-donors'), {'maxDistance': 2000, 'bloodType': 'O+'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = client.get(reverse('hospital-nearby-donors'), {'maxDistance': 500, 'bloodType': 'O+'})
        self.assertNotIn(self.far_donor.id, [d['id'] for d in response.data['donors']])

    def test_nearby_donors_invalid_params(self):
        client = self.authenticate(self.hospital_user)
        for params in ({'maxDistance': 'abc'}, {'maxDistance': 0}, {'bloodType': 'C+'}):
            response = client.get(reverse('hospital-nearby-donors'), params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, params)
            self.assertEqual(response.data['error']['code'], 'bad_request')

    def test_nearby_donors_requires_hospital_location(self):
        client = self.authenticate(self.other_hospital_user)
        response = client.get(reverse('hospital-nearby-donors'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Hospital location not set', str(response.data['error']['message']))

    # ------------------------------------------------------------------
    # Profiles and coordinates
    # ------------------------------------------------------------------
    def test_donor_profile_upsert_converts_yes_no(self):
        client = self.authenticate(self.donor_user)
        response = client.post(reverse('donor-profile'), {
            'firstName': 'Ada', 'lastName': 'Lovelace', 'bloodType': 'A+',
            'hasTattoo': 'yes', 'hasTraveled': 'no', 'tattooDetails': '<b>small</b>',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.donor.refresh_from_db()
        self.assertTrue(self.donor.has_tattoo)
        self.assertFalse(self.donor.has_traveled)
        self.assertEqual(self.donor.tattoo_details, 'small')
        self.assertEqual(self.donor.blood_type, 'A+')
        self.donor_user.refresh_from_db()
        self.assertTrue(self.donor_user.profile_completed)

    def test_hospital_profile_explicit_coordinates(self):
        client = self.authenticate(self.other_hospital_user)
        response = client.post(reverse('hospital-profile'), {
            'name': 'Elsewhere General', 'latitude': 33.8, 'longitude': -84.4,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['hospital']['latitude'], 33.8)
        self.assertEqual(client.get(reverse('hospital-profile')).data['name'], 'Elsewhere General')

    def test_set_coordinates_owner_only(self):
        url = reverse('donor-coordinates', args=[self.donor.id])
        body = {'latitude': 33.0, 'longitude': -84.0}
        self.assertEqual(self.authenticate(self.donor_user).post(url, body, format='json').status_code, 200)
        self.donor.refresh_from_db()
        self.assertEqual((self.donor.latitude, self.donor.longitude), (33.0, -84.0))

        other = self.authenticate(self.far_donor.user)
        self.assertEqual(other.post(url, body, format='json').status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.authenticate(self.admin_user).post(url, body, format='json').status_code, 200)

        missing = reverse('hospital-coordinates', args=[999999])
        response = self.authenticate(self.hospital_user).post(missing, body, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_coordinates_out_of_range(self):
        url = reverse('hospital-coordinates', args=[self.hospital.id])
        response = self.authenticate(self.hospital_user).post(url, {'latitude': 91, 'longitude': 0}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_hospital_map_is_public(self):
        response = APIClient().get(reverse('hospital-map'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [h['id'] for h in response.data]
        self.assertIn(self.hospital.id, ids)
        self.assertNotIn(self.other_hospital.id, ids)

    # ------------------------------------------------------------------
    # Urgency
    # ------------------------------------------------------------------
    def test_hospital_urgency_level_range(self):
        client = self.authenticate(self.hospital_user)
        response = client.put(reverse('hospital-urgency'), {'urgencyLevel': 6}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Urgency level must be between 1 and 5', str(response.data['error']['message']))

        response = client.put(reverse('hospital-urgency'), {'urgencyLevel': 4}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.hospital.refresh_from_db()
        self.assertEqual(self.hospital.blood_urgency_level, 4)

    def test_urgency_request_lifecycle(self):
        hospital = self.authenticate(self.hospital_user)
        response = hospital.post(reverse('hospital-urgency-requests'), {
            'bloodType': 'O+', 'urgencyLevel': 5, 'message': 'Need O+ now',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        req_id = response.data['urgencyRequest']['id']

        donor = self.authenticate(self.donor_user)
        listing = donor.get(reverse('donor-urgency-requests'))
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in listing.data], [req_id])
        self.assertEqual(listing.data[0]['distance'], 0.7)
        self.assertNotIn('user_response', listing.data[0])

        response = donor.post(reverse('donor-schedule-appointment'), {
            'urgencyRequestId': req_id, 'appointmentDate': future(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        appt_id = response.data['appointment']['id']
        self.assertEqual(response.data['appointment']['blood_type'], 'O+')

        listing = donor.get(reverse('donor-urgency-requests'))
        self.assertEqual(listing.data[0]['user_response']['response_type'], 'scheduled')
        self.assertEqual(listing.data[0]['user_response']['appointment']['id'], appt_id)

        # a second booking for the same request must go through reschedule
        response = donor.post(reverse('donor-schedule-appointment'), {
            'urgencyRequestId': req_id, 'appointmentDate': future(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = donor.put(reverse('donor-reschedule-appointment'), {
            'appointmentId': appt_id, 'newAppointmentDate': future(5),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = donor.put(reverse('donor-cancel-appointment', args=[appt_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        appt = Appointment.objects.get(id=appt_id)
        self.assertEqual(appt.status, 'cancelled')
        self.assertIsNotNone(appt.cancelled_at)

        # deactivated requests drop out of the donor's list
        response = hospital.delete(reverse('hospital-urgency-request-detail', args=[req_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(UrgencyRequest.objects.get(id=req_id).is_active)
        self.assertEqual(donor.get(reverse('donor-urgency-requests')).data, [])

    def test_reject_urgency_request(self):
        req = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='A-', urgency_level=3)
        donor = self.authenticate(self.donor_user)
        response = donor.post(reverse('donor-reject-urgency-request'), {
            'urgencyRequestId': req.id, 'rejectionReason': '<script>x</script>Travelling',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        r = UrgencyResponse.objects.get(urgency_request=req, donor=self.donor)
        self.assertEqual(r.response_type, 'rejected')
        self.assertNotIn('<script>', r.rejection_reason)

    def test_reject_after_schedule_cancels_booking(self):
        req = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='O+', urgency_level=4)
        donor = self.authenticate(self.donor_user)
        schedule = {'urgencyRequestId': req.id, 'appointmentDate': future()}
        first = donor.post(reverse('donor-schedule-appointment'), schedule, format='json')
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        response = donor.post(reverse('donor-reject-urgency-request'), {'urgencyRequestId': req.id}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        first_appt = Appointment.objects.get(id=first.data['appointment']['id'])
        self.assertEqual(first_appt.status, 'cancelled')
        self.assertIsNotNone(first_appt.cancelled_at)

        again = donor.post(reverse('donor-schedule-appointment'), schedule, format='json')
        self.assertEqual(again.status_code, status.HTTP_201_CREATED)
        live = Appointment.objects.filter(urgency_request=req, donor=self.donor, status='scheduled')
        self.assertEqual(list(live.values_list('id', flat=True)), [again.data['appointment']['id']])

    def test_hospital_request_list_counts_responses(self):
        req = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='O+', urgency_level=4)
        idle = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='A-', urgency_level=2)
        self.authenticate(self.donor_user).post(reverse('donor-schedule-appointment'), {
            'urgencyRequestId': req.id, 'appointmentDate': future(),
        }, format='json')
        self.authenticate(self.a_neg.user).post(reverse('donor-reject-urgency-request'),
                                                {'urgencyRequestId': req.id}, format='json')
        listing = self.authenticate(self.hospital_user).get(reverse('hospital-urgency-requests'))
        counts = {r['id']: r['responses'] for r in listing.data}
        self.assertEqual(counts[req.id], {'scheduled': 1, 'rejected': 1})
        self.assertEqual(counts[idle.id], {'scheduled': 0, 'rejected': 0})

    def test_schedule_in_the_past_is_rejected(self):
        req = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='O+', urgency_level=3)
        response = self.authenticate(self.donor_user).post(reverse('donor-schedule-appointment'), {
            'urgencyRequestId': req.id, 'appointmentDate': (timezone.now() - timedelta(days=1)).isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Appointment.objects.exists())

    def test_donor_urgency_requests_radius(self):
        far = User.objects.create_user(username='la@example.com', email='la@example.com', password='x', role='hospital')
        la = Hospital.objects.create(user=far, name='LA', latitude=LOS_ANGELES[0], longitude=LOS_ANGELES[1])
        UrgencyRequest.objects.create(hospital=la, blood_type='O+', urgency_level=5)
        near = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='O+', urgency_level=1)
        response = self.authenticate(self.donor_user).get(reverse('donor-urgency-requests'))
        self.assertEqual([r['id'] for r in response.data], [near.id])

    def test_donor_urgency_requests_requires_location(self):
        response = self.authenticate(self.no_location.user).get(reverse('donor-urgency-requests'))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_hospital_cannot_edit_request(self):
        req = UrgencyRequest.objects.create(hospital=self.hospital, blood_type='O+', urgency_level=3)
        client = self.authenticate(self.other_hospital_user)
        response = client.put(reverse('hospital-urgency-request-detail', args=[req.id]),
                              {'urgencyLevel': 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ------------------------------------------------------------------
    # Appointments
    # ------------------------------------------------------------------
    def test_appointments_create_list_and_check_in(self):
        donor = self.authenticate(self.donor_user)
        response = donor.post(reverse('appointment-create'), {
            'hospitalId': self.hospital.id, 'appointmentDate': future(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        appt_id = response.data['appointment']['id']

        listing = donor.get(reverse('appointment-donor-list'))
        self.assertEqual([a['id'] for a in listing.data], [appt_id])
        self.assertEqual(listing.data[0]['hospital_name'], 'Grady')

        hospital = self.authenticate(self.hospital_user)
        self.assertEqual([a['id'] for a in hospital.get(reverse('hospital-appointments')).data], [appt_id])
        response = hospital.put(reverse('appointment-status', args=[appt_id]),
                                {'donationCompleted': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        appt = Appointment.objects.get(id=appt_id)
        self.assertEqual(appt.status, 'completed')
        self.assertTrue(appt.donor_arrived)

        # another hospital cannot see it
        other = self.authenticate(self.other_hospital_user)
        response = other.put(reverse('appointment-status', args=[appt_id]), {'donorArrived': True}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def _booked(self):
        return Appointment.objects.create(
            donor=self.donor, hospital=self.hospital,
            appointment_date=timezone.now() + timedelta(days=2), blood_type='O+',
        )

    def test_check_in_rejects_conflicting_fields(self):
        appt = self._booked()
        client = self.authenticate(self.hospital_user)
        url = reverse('appointment-status', args=[appt.id])
        for body in (
            {'donationCompleted': True, 'status': 'scheduled'},
            {'donationCompleted': True, 'status': 'cancelled'},
            {'donationCompleted': False, 'status': 'completed'},
            {'donorArrived': False, 'donationCompleted': True},
        ):
            response = client.put(url, body, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, body)
        appt.refresh_from_db()
        self.assertEqual(appt.status, 'scheduled')
        self.assertFalse(appt.donation_completed)

    def test_completed_status_marks_donation(self):
        appt = self._booked()
        response = self.authenticate(self.hospital_user).put(
            reverse('appointment-status', args=[appt.id]), {'status': 'completed'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        appt.refresh_from_db()
        self.assertEqual(appt.status, 'completed')
        self.assertTrue(appt.donation_completed)
        self.assertTrue(appt.donor_arrived)

    def test_completed_and_cancelled_appointments_are_final(self):
        completed = self._booked()
        cancelled = self._booked()
        client = self.authenticate(self.hospital_user)
        client.put(reverse('appointment-status', args=[completed.id]), {'donationCompleted': True}, format='json')
        client.put(reverse('appointment-status', args=[cancelled.id]), {'status': 'cancelled'}, format='json')
        cancelled.refresh_from_db()
        cancelled_at = cancelled.cancelled_at
        self.assertIsNotNone(cancelled_at)

        response = client.put(reverse('appointment-status', args=[completed.id]),
                              {'status': 'cancelled'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = client.put(reverse('appointment-status', args=[cancelled.id]),
                              {'status': 'completed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        completed.refresh_from_db()
        cancelled.refresh_from_db()
        self.assertEqual((completed.status, completed.donation_completed, completed.cancelled_at),
                         ('completed', True, None))
        self.assertEqual((cancelled.status, cancelled.donation_completed, cancelled.cancelled_at),
                         ('cancelled', False, cancelled_at))

    def test_appointment_unknown_hospital(self):
        response = self.authenticate(self.donor_user).post(reverse('appointment-create'), {
            'hospitalId': 999999, 'appointmentDate': future(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------
    def test_inventory_upsert_and_read(self):
        client = self.authenticate(self.hospital_user)
        self.assertEqual(client.get(reverse('hospital-inventory')).data, {})
        response = client.post(reverse('hospital-inventory'), {'A_plus': 10, 'O_negative': 3}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'A_plus': 10, 'O_negative': 3})

        client.post(reverse('hospital-inventory'), {'A_plus': 4}, format='json')
        self.assertEqual(BloodInventory.objects.get(hospital=self.hospital, blood_type='A+').quantity, 4)
        self.assertEqual(BloodInventory.objects.filter(hospital=self.hospital).count(), 2)

    def test_inventory_rejects_whole_payload_on_bad_entry(self):
        client = self.authenticate(self.hospital_user)
        response = client.post(reverse('hospital-inventory'), {'A_plus': 10, 'Q_plus': 1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = client.post(reverse('hospital-inventory'), {'B_plus': -1}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(BloodInventory.objects.exists())

    # ------------------------------------------------------------------
    # Patients
    # ------------------------------------------------------------------
    def test_patients_ordering_and_status(self):
        client = self.authenticate(self.hospital_user)
        low = client.post(reverse('patients'), {'patientName': 'Low', 'bloodType': 'B+', 'urgencyLevel': 1},
                          format='json')
        high = client.post(reverse('patients'), {'patientName': 'High', 'bloodType': 'AB-', 'urgencyLevel': 5},
                           format='json')
        self.assertEqual(low.status_code, status.HTTP_201_CREATED)
        listing = client.get(reverse('patients'))
        self.assertEqual([p['patient_name'] for p in listing.data], ['High', 'Low'])

        pid = high.data['patient']['id']
        response = client.put(reverse('patient-status', args=[pid]), {'status': 'fulfilled'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(PatientRequest.objects.get(id=pid).fulfilled_date)

        response = client.put(reverse('patient-status', args=[pid]), {'status': 'lost'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        other = self.authenticate(self.other_hospital_user)
        response = other.put(reverse('patient-status', args=[pid]), {'status': 'cancelled'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patient_create_without_hospital_profile(self):
        orphan = User.objects.create_user(username='o@example.com', email='o@example.com', password='x',
                                          role='hospital')
        response = self.authenticate(orphan).post(reverse('patients'), {
            'patientName': 'P', 'bloodType': 'O-',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    # ------------------------------------------------------------------
    # Admin / debug
    # ------------------------------------------------------------------
    @override_settings(DEBUG_ENDPOINTS_ENABLED=False)
    def test_debug_endpoints_disabled(self):
        client = self.authenticate(self.admin_user)
        self.assertEqual(client.get(reverse('debug-users')).status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(client.post(reverse('debug-reset')).status_code, status.HTTP_404_NOT_FOUND)

    @override_settings(DEBUG_ENDPOINTS_ENABLED=True)
    def test_debug_endpoints_admin_only(self):
        self.assertEqual(self.authenticate(self.hospital_user).get(reverse('debug-users')).status_code,
                         status.HTTP_403_FORBIDDEN)
        client = self.authenticate(self.admin_user)
        dump = client.get(reverse('debug-users'))
        self.assertEqual(dump.status_code, status.HTTP_200_OK)
        self.assertEqual(len(dump.data['hospitals']), 2)

        response = client.post(reverse('debug-reset'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Donor.objects.exists())
        self.assertFalse(Hospital.objects.exists())
        self.assertEqual(list(User.objects.values_list('role', flat=True)), ['admin'])

    @override_settings(DEBUG_ENDPOINTS_ENABLED=True, GOOGLE_MAPS_API_KEY='')
    def test_geocode_existing_without_key_reports_failures(self):
        response = self.authenticate(self.admin_user).post(reverse('admin-geocode-existing'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['donors'], {'updated': 0, 'failed': 1})
        self.assertEqual(response.data['hospitals'], {'updated': 0, 'failed': 1})
