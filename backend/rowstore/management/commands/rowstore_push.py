from django.core.management.base import BaseCommand

from rowstore.services import flush, push_all


class Command(BaseCommand):
    help = "Queue every local row for upsert and optionally flush right away."

    def add_arguments(self, parser):
        parser.add_argument("--flush", action="store_true", help="Push synchronously instead of waiting for beat")

    def handle(self, *args, **opts):
        n = push_all()
        self.stdout.write(self.style.SUCCESS(f"Queued {n} row(s)."))
        if opts["flush"]:
            stats = flush(limit=max(n, 1))
            self.stdout.write(self.style.SUCCESS(f"Flush: {stats}"))
