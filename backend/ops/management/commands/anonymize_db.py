import random, string
from django.core.management.base import BaseCommand, CommandError
from django.conf import settings
from accounts.models import User
from volunteers.models import Volunteer

def _rand_name():
    return "Relawan " + "".join(random.choices(string.ascii_uppercase+string.digits, k=6))

class Command(BaseCommand):
    help = "Scramble volunteer and staff personal data (use ONLY on staging/dev)."

    def handle(self, *args, **opts):
        if not settings.DEBUG:
            raise CommandError("Refusing to anonymize in non-DEBUG environment.")
        for v in Volunteer.objects.all().iterator():
            v.name = _rand_name()
            if v.phone:
                v.phone = "08" + "".join(random.choices("0123456789", k=10))
            v.save(update_fields=["name","phone"])
        for u in User.objects.exclude(pk="master-admin").iterator():
            u.full_name = _rand_name()
            u.save(update_fields=["full_name"])
        self.stdout.write(self.style.SUCCESS("Anonymized volunteers & staff."))
