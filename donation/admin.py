"""
Django admin registrations for the donation models.
"""
from django.contrib import admin

from .models import (
    Appointment,
    AuditEvent,
    BloodInventory,
    Donor,
    Hospital,
    PatientRequest,
    UrgencyRequest,
    UrgencyResponse,
    User,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'role', 'profile_completed', 'is_staff', 'is_superuser')
    list_filter = ('role', 'profile_completed')
    search_fields = ('email', 'username')


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'city', 'state', 'blood_urgency_level', 'latitude', 'longitude')
    list_filter = ('blood_urgency_level', 'state')
    search_fields = ('name', 'city', 'user__email')


@admin.register(Donor)
class DonorAdmin(admin.ModelAdmin):
    list_display = ('id', 'first_name', 'last_name', 'blood_type', 'eligibility_status', 'city')
    list_filter = ('blood_type', 'eligibility_status')
    search_fields = ('first_name', 'last_name', 'user__email', 'city')


@admin.register(UrgencyRequest)
class UrgencyRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'hospital', 'blood_type', 'urgency_level', 'is_active', 'created_at')
    list_filter = ('is_active', 'blood_type', 'urgency_level')


@admin.register(UrgencyResponse)
class UrgencyResponseAdmin(admin.ModelAdmin):
    list_display = ('urgency_request', 'donor', 'response_type', 'created_at')
    list_filter = ('response_type',)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'donor', 'hospital', 'appointment_date', 'status', 'donor_arrived', 'donation_completed')
    list_filter = ('status',)


@admin.register(PatientRequest)
class PatientRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'patient_name', 'hospital', 'blood_type', 'urgency_level', 'status')
    list_filter = ('status', 'blood_type')
    search_fields = ('patient_name',)


@admin.register(BloodInventory)
class BloodInventoryAdmin(admin.ModelAdmin):
    list_display = ('hospital', 'blood_type', 'quantity', 'updated_at')
    list_filter = ('blood_type',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action',)
