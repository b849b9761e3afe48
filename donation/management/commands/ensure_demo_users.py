from django.core.management.base import BaseCommand
from django.db import transaction

from donation.models import Donor, Hospital, User

DEMO_PASSWORD = 'bloodlink123'

DEMO_SET = [
    ('admin@bloodlink.local', User.ROLE_ADMIN),
    ('hospital@bloodlink.local', User.ROLE_HOSPITAL),
    ('donor@bloodlink.local', User.ROLE_DONOR),
]


class Command(BaseCommand):
    help = "Ensure demo accounts exist with a known password (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument('--password', default=DEMO_PASSWORD)

    @transaction.atomic
    def handle(self, *args, **opts):
        for email, role in DEMO_SET:
            u, created = User.objects.get_or_create(
                email=email,
                defaults={'username': email, 'role': role, 'is_active': True},
            )
            u.role = role
            u.is_active = True
            u.is_staff = role == User.ROLE_ADMIN
            u.set_password(opts['password'])
            u.save()
            if role == User.ROLE_HOSPITAL:
                Hospital.objects.get_or_create(user=u)
            elif role == User.ROLE_DONOR:
                Donor.objects.get_or_create(user=u)
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All demo users ensured."))
