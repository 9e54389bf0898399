from django.core.management.base import BaseCommand

from rowstore.services import pull_all


class Command(BaseCommand):
    help = "Pull every table from the hosted row store into the local database (last writer wins)."

    def handle(self, *args, **opts):
        counts = pull_all()
        for table, n in counts.items():
            self.stdout.write(f"{table}: {n}")
        self.stdout.write(self.style.SUCCESS("Pull complete."))
