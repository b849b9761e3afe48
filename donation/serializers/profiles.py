from rest_framework import serializers

from .fields import BloodTypeField, CleanCharField, YesNoField


class CoordinatesSerializer(serializers.Serializer):
    latitude = serializers.FloatField(min_value=-90, max_value=90)
    longitude = serializers.FloatField(min_value=-180, max_value=180)


class DonorProfileSerializer(serializers.Serializer):
    firstName = CleanCharField(max_length=100)
    lastName = CleanCharField(max_length=100)
    dateOfBirth = serializers.DateField(required=False, allow_null=True)
    gender = CleanCharField(max_length=20)
    phoneNumber = CleanCharField(max_length=32)
    street = CleanCharField(max_length=255)
    city = CleanCharField(max_length=100)
    state = CleanCharField(max_length=100)
    zipCode = CleanCharField(max_length=20)
    bloodType = BloodTypeField(required=False)
    weight = serializers.FloatField(required=False, allow_null=True, min_value=0)
    height = serializers.FloatField(required=False, allow_null=True, min_value=0)
    hasChronicIllness = YesNoField(required=False)
    chronicIllnessDetails = CleanCharField()
    hasTraveled = YesNoField(required=False)
    travelDetails = CleanCharField()
    hasTattoo = YesNoField(required=False)
    tattooDetails = CleanCharField()
    isOnMedication = YesNoField(required=False)
    medicationDetails = CleanCharField()
    emergencyContactName = CleanCharField(max_length=200)
    emergencyContactPhone = CleanCharField(max_length=32)
    emergencyContactRelationship = CleanCharField(max_length=100)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)

    # request key -> Donor field
    FIELD_MAP = {
        'firstName': 'first_name',
        'lastName': 'last_name',
        'dateOfBirth': 'date_of_birth',
        'gender': 'gender',
        'phoneNumber': 'phone_number',
        'street': 'street',
        'city': 'city',
        'state': 'state',
        'zipCode': 'zip_code',
        'bloodType': 'blood_type',
        'weight': 'weight',
        'height': 'height',
        'hasChronicIllness': 'has_chronic_illness',
        'chronicIllnessDetails': 'chronic_illness_details',
        'hasTraveled': 'has_traveled',
        'travelDetails': 'travel_details',
        'hasTattoo': 'has_tattoo',
        'tattooDetails': 'tattoo_details',
        'isOnMedication': 'is_on_medication',
        'medicationDetails': 'medication_details',
        'emergencyContactName': 'emergency_contact_name',
        'emergencyContactPhone': 'emergency_contact_phone',
        'emergencyContactRelationship': 'emergency_contact_relationship',
        'latitude': 'latitude',
        'longitude': 'longitude',
    }
    ADDRESS_FIELDS = {'street', 'city', 'state', 'zip_code'}


class HospitalProfileSerializer(serializers.Serializer):
    name = CleanCharField(max_length=255)
    address = CleanCharField(max_length=255)
    city = CleanCharField(max_length=100)
    state = CleanCharField(max_length=100)
    zipCode = CleanCharField(max_length=20)
    phoneNumber = CleanCharField(max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True)
    latitude = serializers.FloatField(required=False, allow_null=True, min_value=-90, max_value=90)
    longitude = serializers.FloatField(required=False, allow_null=True, min_value=-180, max_value=180)
    operatingHours = CleanCharField(max_length=255)

    FIELD_MAP = {
        'name': 'name',
        'address': 'address',
        'city': 'city',
        'state': 'state',
        'zipCode': 'zip_code',
        'phoneNumber': 'phone_number',
        'email': 'email',
        'latitude': 'latitude',
        'longitude': 'longitude',
        'operatingHours': 'operating_hours',
    }
    ADDRESS_FIELDS = {'address', 'city', 'state', 'zip_code'}

    def validate_name(self, v):
        if not v:
            raise serializers.ValidationError('name must not be empty')
        return v
