"""
Realtime endpoints
NoteShare - Department Note-Sharing Portal

- ChangeStreamView: text/event-stream of change events (EventSource)
- ChangePollView: JSON batch of events after a cursor (fallback polling)

Both accept ?tables=notes,departments,profiles. The stream resumes from
the Last-Event-ID header or ?since=; without either it only reports
changes made after the connection opened.
"""

from django.conf import settings
from django.contrib.auth.mixins import LoginRequiredMixin
from django.http import JsonResponse, StreamingHttpResponse
from django.views import View

from .services import ChangeFeed


class ChangeStreamView(LoginRequiredMixin, View):

    def get(self, request):
        tables = ChangeFeed.parse_tables(request.GET.get('tables'))
        cursor = ChangeFeed.parse_cursor(
            request.headers.get('Last-Event-ID') or request.GET.get('since')
        )
        if cursor is None:
            cursor = ChangeFeed.latest_cursor()

        response = StreamingHttpResponse(
            ChangeFeed.stream(
                cursor,
                tables,
                poll_interval=settings.REALTIME_POLL_INTERVAL,
                timeout=settings.REALTIME_STREAM_TIMEOUT,
            ),
            content_type='text/event-stream',
        )
        response['Cache-Control'] = 'no-cache'
        response['X-Accel-Buffering'] = 'no'
        return response


class ChangePollView(LoginRequiredMixin, View):

    def get(self, request):
        tables = ChangeFeed.parse_tables(request.GET.get('tables'))
        cursor = ChangeFeed.parse_cursor(request.GET.get('since'))
        if cursor is None:
            return JsonResponse({'events': [], 'cursor': ChangeFeed.latest_cursor()})

        events = ChangeFeed.since(cursor, tables)
        if events:
            cursor = events[-1].pk
        return JsonResponse({
            'events': [event.to_dict() for event in events],
            'cursor': cursor,
        })
