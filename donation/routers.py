"""
URL mappings for the BloodLink API.

Trailing slashes are omitted to match the paths the web client calls.
Every route is named so tests and clients can ``reverse()`` them.
"""
from django.urls import path

from .auth_views import login_view, logout_view, refresh_view, signup_view
from .views import appointments, debug, donors, health, hospitals, patients, urgency

urlpatterns = [
    # Health
    path('healthz', health.healthz, name='healthz'),
    path('api/health', health.healthz, name='health'),

    # Authentication
    path('api/auth/signup', signup_view, name='auth-signup'),
    path('api/auth/login', login_view, name='auth-login'),
    path('api/auth/refresh', refresh_view, name='auth-refresh'),
    path('api/auth/logout', logout_view, name='auth-logout'),

    # Donors
    path('api/donors/profile', donors.donor_profile, name='donor-profile'),
    path('api/donors/<int:pk>/coordinates', donors.donor_coordinates, name='donor-coordinates'),
    path('api/donors/urgency-requests', donors.urgency_requests_for_donor, name='donor-urgency-requests'),
    path('api/donors/schedule-appointment', donors.schedule_appointment, name='donor-schedule-appointment'),
    path('api/donors/reject-urgency-request', donors.reject_urgency_request, name='donor-reject-urgency-request'),
    path('api/donors/reschedule-appointment', donors.reschedule_appointment, name='donor-reschedule-appointment'),
    path('api/donors/cancel-appointment/<int:pk>', donors.cancel_appointment, name='donor-cancel-appointment'),

    # Hospitals
    path('api/hospitals/profile', hospitals.hospital_profile, name='hospital-profile'),
    path('api/hospitals/urgency', hospitals.hospital_urgency, name='hospital-urgency'),
    path('api/hospitals/map', hospitals.hospitals_map, name='hospital-map'),
    path('api/hospitals/nearby-donors', hospitals.nearby_donors_view, name='hospital-nearby-donors'),
    path('api/hospitals/<int:pk>/coordinates', hospitals.hospital_coordinates, name='hospital-coordinates'),
    path('api/hospitals/inventory', hospitals.hospital_inventory, name='hospital-inventory'),
    path('api/hospitals/urgency-requests', urgency.hospital_urgency_requests, name='hospital-urgency-requests'),
    path('api/hospitals/urgency-requests/<int:pk>', urgency.hospital_urgency_request_detail,
         name='hospital-urgency-request-detail'),
    path('api/hospitals/appointments', appointments.hospital_appointments, name='hospital-appointments'),

    # Patients
    path('api/patients', patients.patients, name='patients'),
    path('api/patients/<int:pk>/status', patients.patient_status, name='patient-status'),

    # Appointments
    path('api/appointments', appointments.create_appointment, name='appointment-create'),
    path('api/appointments/donor', appointments.donor_appointments, name='appointment-donor-list'),
    path('api/appointments/<int:pk>/status', appointments.appointment_status, name='appointment-status'),

    # Admin / debug
    path('api/debug/users', debug.debug_users, name='debug-users'),
    path('api/reset', debug.reset_database, name='debug-reset'),
    path('api/admin/geocode-existing', debug.geocode_existing, name='admin-geocode-existing'),
]
