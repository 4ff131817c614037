from django.conf import settings
from django.core.management.base import BaseCommand

from apps.realtime.services import ChangeFeed


class Command(BaseCommand):
    help = 'Delete realtime change events older than the retention window.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--hours',
            type=int,
            default=settings.REALTIME_RETENTION_HOURS,
            help='Keep events newer than this many hours (default: REALTIME_RETENTION_HOURS).',
        )

    def handle(self, *args, **options):
        deleted = ChangeFeed.prune(options['hours'])
        self.stdout.write(self.style.SUCCESS(f'Deleted {deleted} change event(s).'))
