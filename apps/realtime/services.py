"""
Realtime change feed
NoteShare - Department Note-Sharing Portal

=== How screens stay fresh ===
1. Signal receivers publish a ChangeEvent after every committed write to
   notes, departments or user profiles.
2. Browsers hold an EventSource on the stream endpoint (or poll the JSON
   endpoint) with the id of the last event they saw.
3. static/js/realtime.js turns each event into an htmx trigger
   "<table>-changed"; fragments listening for it re-fetch themselves.
"""

import json
import logging
import time
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from .models import ChangeEvent

logger = logging.getLogger('realtime')

SSE_RETRY_MS = 3000
MAX_EVENTS_PER_BATCH = 200


class ChangeFeed:

    WATCHED_TABLES = tuple(ChangeEvent.Table.values)

    @classmethod
    def parse_tables(cls, raw):
        """'notes,departments' -> ['notes', 'departments']; unknown names dropped, empty means all."""
        if not raw:
            return list(cls.WATCHED_TABLES)
        requested = [t.strip() for t in raw.split(',') if t.strip()]
        tables = [t for t in requested if t in cls.WATCHED_TABLES]
        return tables or list(cls.WATCHED_TABLES)

    @staticmethod
    def parse_cursor(raw):
        try:
            return max(int(raw), 0)
        except (TypeError, ValueError):
            return None

    @classmethod
    def publish(cls, table, action, object_id=None):
        """Record a change once the surrounding transaction commits."""
        def _create():
            event = ChangeEvent.objects.create(table=table, action=action, object_id=object_id)
            logger.debug(f"Published {event}")
        transaction.on_commit(_create)

    @staticmethod
    def latest_cursor() -> int:
        last = ChangeEvent.objects.order_by('-id').values_list('id', flat=True).first()
        return last or 0

    @staticmethod
    def since(cursor, tables, limit=MAX_EVENTS_PER_BATCH):
        return list(
            ChangeEvent.objects
            .filter(id__gt=cursor, table__in=tables)
            .order_by('id')[:limit]
        )

    @staticmethod
    def prune(older_than_hours) -> int:
        cutoff = timezone.now() - timedelta(hours=older_than_hours)
        deleted, _ = ChangeEvent.objects.filter(created_at__lt=cutoff).delete()
        logger.info(f"Pruned {deleted} change event(s) older than {older_than_hours}h")
        return deleted

    @staticmethod
    def format_sse(event) -> str:
        return f"id: {event.pk}\nevent: {event.table}\ndata: {json.dumps(event.to_dict())}\n\n"

    @classmethod
    def stream(cls, cursor, tables, poll_interval, timeout):
        """
        Server-Sent Events generator.

        Emits every event after cursor, then keeps polling until timeout
        seconds have passed. The browser reconnects with Last-Event-ID.
        """
        yield f"retry: {SSE_RETRY_MS}\n\n"
        deadline = time.monotonic() + timeout
        while True:
            for event in cls.since(cursor, tables):
                cursor = event.pk
                yield cls.format_sse(event)
            if time.monotonic() >= deadline:
                break
            time.sleep(poll_interval)
            yield ": keep-alive\n\n"
