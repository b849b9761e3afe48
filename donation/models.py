"""
Database models for the BloodLink backend.

These models capture the directory the API works against: user
accounts with a donor or hospital role, their profiles (including the
coordinates used for proximity matching), urgency requests posted by
hospitals and the donors' responses to them, appointments, blood
inventory and patient blood requests.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .blood import (
    BLOOD_TYPE_CHOICES,
    ELIGIBILITY_CHOICES,
    ELIGIBLE,
    URGENCY_CHOICES,
    URGENCY_MAX,
    URGENCY_MIN,
)

URGENCY_VALIDATORS = [MinValueValidator(URGENCY_MIN), MaxValueValidator(URGENCY_MAX)]


def _join_address(street: str, city: str, state: str, zip_code: str) -> str:
    parts = [street, city, f"{state} {zip_code}".strip()]
    return ", ".join(p.strip() for p in parts if p and p.strip())


class User(AbstractUser):
    """Account with a role; the email address is the login identifier.

    ``username`` is kept because Django's auth machinery requires it; the
    signup flow stores the email there as well.
    """
    ROLE_DONOR = 'donor'
    ROLE_HOSPITAL = 'hospital'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_DONOR, 'Donor'),
        (ROLE_HOSPITAL, 'Hospital'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_DONOR, db_index=True)
    profile_completed = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class Hospital(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='hospital')
    name = models.CharField(max_length=255, default='New Hospital Center')
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    operating_hours = models.CharField(max_length=255, blank=True)
    blood_urgency_level = models.PositiveSmallIntegerField(
        choices=URGENCY_CHOICES, default=URGENCY_MIN, validators=URGENCY_VALIDATORS
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} (#{self.id})"

    @property
    def full_address(self) -> str:
        return _join_address(self.address, self.city, self.state, self.zip_code)


class Donor(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='donor')
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=20, blank=True)
    phone_number = models.CharField(max_length=32, blank=True)
    street = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=100, blank=True)
    zip_code = models.CharField(max_length=20, blank=True)
    # blood type and eligibility are the matching filters
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, blank=True, db_index=True)
    weight = models.FloatField(null=True, blank=True)
    height = models.FloatField(null=True, blank=True)
    has_chronic_illness = models.BooleanField(default=False)
    chronic_illness_details = models.TextField(blank=True)
    has_traveled = models.BooleanField(default=False)
    travel_details = models.TextField(blank=True)
    has_tattoo = models.BooleanField(default=False)
    tattoo_details = models.TextField(blank=True)
    is_on_medication = models.BooleanField(default=False)
    medication_details = models.TextField(blank=True)
    emergency_contact_name = models.CharField(max_length=200, blank=True)
    emergency_contact_phone = models.CharField(max_length=32, blank=True)
    emergency_contact_relationship = models.CharField(max_length=100, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    eligibility_status = models.CharField(
        max_length=16, choices=ELIGIBILITY_CHOICES, default=ELIGIBLE, db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name} ({self.blood_type or '?'})"

    @property
    def full_address(self) -> str:
        return _join_address(self.street, self.city, self.state, self.zip_code)


class PatientRequest(models.Model):
    """A patient's blood need recorded by a hospital."""
    STATUS_PENDING = 'pending'
    STATUS_FULFILLED = 'fulfilled'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_FULFILLED, 'Fulfilled'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='patients')
    patient_name = models.CharField(max_length=200)
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    condition = models.CharField(max_length=255, blank=True)
    urgency_level = models.PositiveSmallIntegerField(
        choices=URGENCY_CHOICES, default=URGENCY_MIN, validators=URGENCY_VALIDATORS
    )
    units_required = models.PositiveIntegerField(default=1)
    required_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    fulfilled_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['hospital', 'urgency_level', 'created_at'], name='patient_hosp_urgency_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.patient_name} needs {self.units_required}x {self.blood_type}"


class UrgencyRequest(models.Model):
    """A hospital's call for donors of one blood type."""
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='urgency_requests')
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    urgency_level = models.PositiveSmallIntegerField(
        choices=URGENCY_CHOICES, default=URGENCY_MIN, validators=URGENCY_VALIDATORS
    )
    message = models.TextField(blank=True)
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['is_active', 'blood_type'], name='urgency_active_type_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.blood_type} L{self.urgency_level} @ {self.hospital_id}"


class Appointment(models.Model):
    STATUS_SCHEDULED = 'scheduled'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = [
        (STATUS_SCHEDULED, 'Scheduled'),
        (STATUS_COMPLETED, 'Completed'),
        (STATUS_CANCELLED, 'Cancelled'),
    ]
    donor = models.ForeignKey(Donor, on_delete=models.CASCADE, related_name='appointments')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='appointments')
    urgency_request = models.ForeignKey(
        UrgencyRequest, null=True, blank=True, on_delete=models.SET_NULL, related_name='appointments'
    )
    appointment_date = models.DateTimeField()
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES, blank=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SCHEDULED, db_index=True)
    donor_arrived = models.BooleanField(default=False)
    donation_completed = models.BooleanField(default=False)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Appointment #{self.id} donor={self.donor_id} hospital={self.hospital_id}"


class UrgencyResponse(models.Model):
    """A donor's answer to an urgency request: scheduled or rejected."""
    TYPE_SCHEDULED = 'scheduled'
    TYPE_REJECTED = 'rejected'
    TYPE_CHOICES = [
        (TYPE_SCHEDULED, 'Scheduled'),
        (TYPE_REJECTED, 'Rejected'),
    ]
    urgency_request = models.ForeignKey(UrgencyRequest, on_delete=models.CASCADE, related_name='responses')
    donor = models.ForeignKey(Donor, on_delete=models.CASCADE, related_name='urgency_responses')
    response_type = models.CharField(max_length=16, choices=TYPE_CHOICES)
    rejection_reason = models.TextField(blank=True)
    scheduled_appointment = models.ForeignKey(
        Appointment, null=True, blank=True, on_delete=models.SET_NULL, related_name='responses'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = [('urgency_request', 'donor')]

    def __str__(self) -> str:
        return f"{self.donor_id} {self.response_type} request {self.urgency_request_id}"


class BloodInventory(models.Model):
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='inventory')
    blood_type = models.CharField(max_length=3, choices=BLOOD_TYPE_CHOICES)
    quantity = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = [('hospital', 'blood_type')]
        verbose_name_plural = 'blood inventory'

    def __str__(self) -> str:
        return f"{self.hospital_id}: {self.blood_type} x{self.quantity}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
