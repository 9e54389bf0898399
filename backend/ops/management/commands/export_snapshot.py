from pathlib import Path

from django.core.management.base import BaseCommand

from ops.models import SnapshotBackup
from ops.snapshot import counts, snapshot, snapshot_bytes


class Command(BaseCommand):
    help = "Write a JSON snapshot of every collection to a file."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Destination file, e.g. backups/sppg.json")

    def handle(self, *args, **opts):
        data = snapshot()
        body = snapshot_bytes(data)
        path = Path(opts["path"])
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(body)
        SnapshotBackup.objects.create(location=str(path.resolve()), size_bytes=len(body), counts=counts(data))
        self.stdout.write(self.style.SUCCESS(f"Wrote {len(body)} bytes to {path}"))
