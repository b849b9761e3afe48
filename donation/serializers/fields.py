import bleach
from rest_framework import serializers

from donation.blood import ALL_BLOOD_TYPES, BLOOD_TYPES


def clean_text(v):
    return bleach.clean((v or '').strip(), tags=[], strip=True)


class CleanCharField(serializers.CharField):
    """CharField with HTML stripped; blank allowed unless said otherwise."""

    def __init__(self, **kwargs):
        kwargs.setdefault('allow_blank', True)
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        return clean_text(super().to_internal_value(data))


class YesNoField(serializers.Field):
    """Accepts ``'yes'``/``'no'`` strings from the dashboard forms as well as booleans."""

    TRUE = {'yes', 'true', '1', 'y'}
    FALSE = {'no', 'false', '0', 'n', ''}

    def to_internal_value(self, data):
        if isinstance(data, bool):
            return data
        value = str(data).strip().lower()
        if value in self.TRUE:
            return True
        if value in self.FALSE:
            return False
        self.fail('invalid')

    def to_representation(self, value):
        return 'yes' if value else 'no'

    default_error_messages = {'invalid': 'expected yes or no'}


class BloodTypeField(serializers.ChoiceField):
    def __init__(self, *, allow_all=False, **kwargs):
        choices = list(BLOOD_TYPES) + ([ALL_BLOOD_TYPES] if allow_all else [])
        super().__init__(choices=choices, **kwargs)

    def to_internal_value(self, data):
        # "O " from a query string decodes "O+" as "O " when not url-encoded
        if isinstance(data, str) and data.endswith(' ') and data.strip() + '+' in BLOOD_TYPES:
            data = data.strip() + '+'
        return super().to_internal_value(data)
