from rest_framework import serializers

from donation.blood import URGENCY_MAX, URGENCY_MIN

from .fields import BloodTypeField, CleanCharField


class UrgencyLevelSerializer(serializers.Serializer):
    urgencyLevel = serializers.IntegerField(
        min_value=URGENCY_MIN,
        max_value=URGENCY_MAX,
        error_messages={
            'min_value': 'Urgency level must be between 1 and 5',
            'max_value': 'Urgency level must be between 1 and 5',
        },
    )


class NearbyDonorsQuerySerializer(serializers.Serializer):
    bloodType = BloodTypeField(allow_all=True, required=False)
    maxDistance = serializers.IntegerField(required=False, min_value=1, max_value=500)


class RadiusQuerySerializer(serializers.Serializer):
    maxDistance = serializers.IntegerField(required=False, min_value=1, max_value=500)


class UrgencyRequestSerializer(serializers.Serializer):
    bloodType = BloodTypeField()
    urgencyLevel = serializers.IntegerField(min_value=URGENCY_MIN, max_value=URGENCY_MAX)
    message = CleanCharField(max_length=2000)


class UrgencyRequestUpdateSerializer(serializers.Serializer):
    bloodType = BloodTypeField(required=False)
    urgencyLevel = serializers.IntegerField(required=False, min_value=URGENCY_MIN, max_value=URGENCY_MAX)
    message = CleanCharField(max_length=2000)
    isActive = serializers.BooleanField(required=False)


class PatientCreateSerializer(serializers.Serializer):
    patientName = CleanCharField(max_length=200, required=True, allow_blank=False)
    bloodType = BloodTypeField()
    condition = CleanCharField(max_length=255)
    urgencyLevel = serializers.IntegerField(required=False, min_value=URGENCY_MIN, max_value=URGENCY_MAX)
    unitsRequired = serializers.IntegerField(required=False, min_value=1)
    requiredDate = serializers.DateField(required=False, allow_null=True)
    notes = CleanCharField(max_length=4000)


class PatientStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=['pending', 'fulfilled', 'cancelled'],
        error_messages={'invalid_choice': 'Invalid status'},
    )


class AppointmentCreateSerializer(serializers.Serializer):
    hospitalId = serializers.IntegerField()
    appointmentDate = serializers.DateTimeField()
    bloodType = BloodTypeField(required=False)


class ScheduleAppointmentSerializer(serializers.Serializer):
    urgencyRequestId = serializers.IntegerField()
    hospitalId = serializers.IntegerField(required=False)
    appointmentDate = serializers.DateTimeField()
    bloodType = BloodTypeField(required=False)


class RejectUrgencyRequestSerializer(serializers.Serializer):
    urgencyRequestId = serializers.IntegerField()
    rejectionReason = CleanCharField(max_length=2000)


class RescheduleAppointmentSerializer(serializers.Serializer):
    appointmentId = serializers.IntegerField()
    newAppointmentDate = serializers.DateTimeField()


class AppointmentStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['scheduled', 'completed', 'cancelled'], required=False)
    donorArrived = serializers.BooleanField(required=False)
    donationCompleted = serializers.BooleanField(required=False)

    def validate(self, attrs):
        completed = attrs.get('donationCompleted')
        status = attrs.get('status')
        if completed is True and status not in (None, 'completed'):
            raise serializers.ValidationError({'status': f'conflicts with donationCompleted: {status}'})
        if completed is False and status == 'completed':
            raise serializers.ValidationError({'status': 'conflicts with donationCompleted: false'})
        if attrs.get('donorArrived') is False and (completed or status == 'completed'):
            raise serializers.ValidationError({'donorArrived': 'a completed donation implies arrival'})
        return attrs
