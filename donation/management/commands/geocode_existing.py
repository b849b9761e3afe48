from django.core.management.base import BaseCommand

from donation.models import Donor, Hospital
from donation.services.geocoding import geocode_missing


class Command(BaseCommand):
    help = "Geocode donors and hospitals that have an address but no coordinates."

    def handle(self, *args, **options):
        for label, model in (('donors', Donor), ('hospitals', Hospital)):
            updated, failed = geocode_missing(model, address_of=lambda obj: obj.full_address)
            style = self.style.SUCCESS if not failed else self.style.WARNING
            self.stdout.write(style(f"{label}: {updated} geocoded, {failed} failed"))
