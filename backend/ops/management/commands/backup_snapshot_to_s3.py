from django.core.management.base import BaseCommand
from ops.tasks import nightly_backup
class Command(BaseCommand):
    help = "Upload a JSON snapshot of every collection to S3 now."
    def handle(self, *args, **opts):
        res = nightly_backup()
        self.stdout.write(self.style.SUCCESS(str(res)))
