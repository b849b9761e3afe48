"""
Management command to populate the database with demo data.

Creates hospitals and donors scattered around central Atlanta with
fixed coordinates, so the nearby-donor search has something to find
without a geocoding key.
"""
import random
from datetime import timedelta

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from donation.blood import BLOOD_TYPES, ELIGIBLE, INELIGIBLE
from donation.models import (
    Appointment,
    BloodInventory,
    Donor,
    Hospital,
    PatientRequest,
    UrgencyRequest,
    User,
)

PASSWORD = 'bloodlink123'

HOSPITALS = [
    ('Grady Memorial Hospital', '80 Jesse Hill Jr Dr SE', '30303', 33.7529, -84.3816, 4),
    ('Emory University Hospital Midtown', '550 Peachtree St NE', '30308', 33.7687, -84.3864, 2),
    ("Piedmont Atlanta Hospital", '1968 Peachtree Rd NW', '30309', 33.8090, -84.3946, 3),
]

FIRST_NAMES = ['Alex', 'Jordan', 'Sam', 'Taylor', 'Morgan', 'Casey', 'Riley', 'Jamie', 'Avery', 'Quinn']
LAST_NAMES = ['Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Garcia', 'Miller', 'Davis']

ATLANTA = (33.7490, -84.3880)


class Command(BaseCommand):
    help = 'Populate database with demo hospitals, donors and requests'

    def add_arguments(self, parser):
        parser.add_argument('--donors', type=int, default=25)
        parser.add_argument('--seed', type=int, default=42)

    @transaction.atomic
    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        hospitals = self.create_hospitals(rng)
        donors = self.create_donors(rng, options['donors'])
        self.create_requests(rng, hospitals)
        self.create_appointments(rng, hospitals, donors)
        self.stdout.write(self.style.SUCCESS(
            f'Demo data ready: {len(hospitals)} hospitals, {len(donors)} donors'
        ))

    def _user(self, email, role):
        u, _ = User.objects.get_or_create(email=email, defaults={'username': email, 'role': role})
        u.role = role
        u.profile_completed = True
        u.set_password(PASSWORD)
        u.save()
        return u

    def create_hospitals(self, rng):
        hospitals = []
        for i, (name, street, zip_code, lat, lon, level) in enumerate(HOSPITALS, start=1):
            u = self._user(f'hospital{i}@bloodlink.local', User.ROLE_HOSPITAL)
            h, _ = Hospital.objects.update_or_create(user=u, defaults={
                'name': name, 'address': street, 'city': 'Atlanta', 'state': 'GA', 'zip_code': zip_code,
                'email': u.email, 'phone_number': f'404-555-01{i:02d}', 'operating_hours': '24/7',
                'latitude': lat, 'longitude': lon, 'blood_urgency_level': level,
            })
            for bt in BLOOD_TYPES:
                BloodInventory.objects.update_or_create(
                    hospital=h, blood_type=bt, defaults={'quantity': rng.randint(0, 40)}
                )
            hospitals.append(h)
        self.stdout.write(f'hospitals: {len(hospitals)}')
        return hospitals

    def create_donors(self, rng, count):
        donors = []
        for i in range(1, count + 1):
            u = self._user(f'donor{i}@bloodlink.local', User.ROLE_DONOR)
            # roughly within 10 miles of downtown
            lat = ATLANTA[0] + rng.uniform(-0.15, 0.15)
            lon = ATLANTA[1] + rng.uniform(-0.15, 0.15)
            d, _ = Donor.objects.update_or_create(user=u, defaults={
                'first_name': rng.choice(FIRST_NAMES),
                'last_name': rng.choice(LAST_NAMES),
                'blood_type': rng.choice(BLOOD_TYPES),
                'city': 'Atlanta', 'state': 'GA',
                'phone_number': f'678-555-{i:04d}',
                'weight': rng.randint(115, 240),
                'latitude': round(lat, 6), 'longitude': round(lon, 6),
                'eligibility_status': ELIGIBLE if rng.random() > 0.1 else INELIGIBLE,
            })
            donors.append(d)
        self.stdout.write(f'donors: {len(donors)}')
        return donors

    def create_requests(self, rng, hospitals):
        for h in hospitals:
            for bt in rng.sample(BLOOD_TYPES, 2):
                UrgencyRequest.objects.get_or_create(
                    hospital=h, blood_type=bt, is_active=True,
                    defaults={'urgency_level': rng.randint(2, 5), 'message': f'{bt} donors needed at {h.name}'},
                )
            PatientRequest.objects.get_or_create(
                hospital=h, patient_name='Demo Patient',
                defaults={'blood_type': rng.choice(BLOOD_TYPES), 'urgency_level': rng.randint(1, 5),
                          'units_required': rng.randint(1, 4), 'condition': 'Surgery'},
            )

    def create_appointments(self, rng, hospitals, donors):
        now = timezone.now()
        for d in rng.sample(donors, min(5, len(donors))):
            Appointment.objects.create(
                donor=d,
                hospital=rng.choice(hospitals),
                appointment_date=now + timedelta(days=rng.randint(1, 14), hours=rng.randint(8, 16)),
                blood_type=d.blood_type,
            )
