"""
Realtime tests: change events from signals, polling and the SSE stream
"""

import json
import tempfile
from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils import timezone

from apps.departments.services import DepartmentService
from apps.realtime.models import ChangeEvent
from apps.realtime.services import ChangeFeed
from .base import BaseTestMixin


class ChangeEventSignalTest(TestCase, BaseTestMixin):

    def test_department_insert_update_delete(self):
        """T01: Department writes publish insert, update and delete events."""
        with self.captureOnCommitCallbacks(execute=True):
            department = DepartmentService.create('Physics')
        with self.captureOnCommitCallbacks(execute=True):
            DepartmentService.rename(department, 'Applied Physics')
        department_id = department.pk
        with self.captureOnCommitCallbacks(execute=True):
            DepartmentService.delete(department)

        events = list(ChangeEvent.objects.filter(table='departments'))
        self.assertEqual([e.action for e in events], ['INSERT', 'UPDATE', 'DELETE'])
        self.assertTrue(all(e.object_id == department_id for e in events))

    def test_event_waits_for_commit(self):
        """T02: Nothing is published until the transaction commits."""
        with self.captureOnCommitCallbacks(execute=False) as callbacks:
            self.create_department('Chemistry')
        self.assertFalse(ChangeEvent.objects.exists())
        self.assertEqual(len(callbacks), 1)

    def test_profile_event(self):
        """T03: User writes publish on the profiles table."""
        with self.captureOnCommitCallbacks(execute=True):
            self.create_user()
        self.assertTrue(ChangeEvent.objects.filter(table='profiles', action='INSERT').exists())

    def test_last_login_ignored(self):
        """T04: Login timestamps do not wake up dashboards."""
        user = self.create_user()
        with self.captureOnCommitCallbacks(execute=True):
            user.last_login = timezone.now()
            user.save(update_fields=['last_login'])
        self.assertFalse(ChangeEvent.objects.filter(table='profiles', action='UPDATE').exists())

    @override_settings(MEDIA_ROOT=tempfile.mkdtemp())
    def test_note_event(self):
        """T05: Uploading a note publishes on the notes table."""
        faculty = self.create_faculty(department=self.create_department())
        with self.captureOnCommitCallbacks(execute=True):
            note = self.upload_note(faculty)
        self.assertTrue(ChangeEvent.objects.filter(table='notes', action='INSERT', object_id=note.pk).exists())


class ChangeFeedTest(TestCase):

    def _event(self, table='notes', action='INSERT', object_id=1):
        return ChangeEvent.objects.create(table=table, action=action, object_id=object_id)

    def test_parse_tables(self):
        """T06: Unknown tables are dropped, empty means all."""
        self.assertEqual(ChangeFeed.parse_tables('notes, bogus'), ['notes'])
        self.assertEqual(ChangeFeed.parse_tables(''), ['notes', 'departments', 'profiles'])
        self.assertEqual(ChangeFeed.parse_tables('bogus'), ['notes', 'departments', 'profiles'])

    def test_parse_cursor(self):
        """T07: Cursor parsing."""
        self.assertEqual(ChangeFeed.parse_cursor('12'), 12)
        self.assertEqual(ChangeFeed.parse_cursor('-3'), 0)
        self.assertIsNone(ChangeFeed.parse_cursor('abc'))
        self.assertIsNone(ChangeFeed.parse_cursor(None))

    def test_since_filters_tables(self):
        """T08: Only requested tables after the cursor, in id order."""
        first = self._event('notes')
        self._event('profiles')
        third = self._event('notes', 'DELETE')
        events = ChangeFeed.since(0, ['notes'])
        self.assertEqual([e.pk for e in events], [first.pk, third.pk])
        self.assertEqual(ChangeFeed.since(first.pk, ['notes']), [third])

    def test_format_sse(self):
        """T09: SSE frame with id, event name and JSON data."""
        event = self._event('departments', 'UPDATE', 4)
        frame = ChangeFeed.format_sse(event)
        self.assertTrue(frame.startswith(f'id: {event.pk}\nevent: departments\ndata: '))
        self.assertTrue(frame.endswith('\n\n'))
        payload = json.loads(frame.split('data: ', 1)[1])
        self.assertEqual(payload['object_id'], 4)

    def test_stream_emits_backlog(self):
        """T10: With no timeout the stream emits the backlog once and stops."""
        event = self._event()
        chunks = list(ChangeFeed.stream(0, ['notes'], poll_interval=0, timeout=0))
        self.assertEqual(chunks[0], 'retry: 3000\n\n')
        self.assertEqual(chunks[1], ChangeFeed.format_sse(event))
        self.assertEqual(len(chunks), 2)

    def test_prune(self):
        """T11: Old events are removed."""
        old = self._event()
        ChangeEvent.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(hours=48))
        recent = self._event()
        self.assertEqual(ChangeFeed.prune(24), 1)
        self.assertEqual(list(ChangeEvent.objects.all()), [recent])

    def test_prune_command(self):
        """T12: Management command wraps prune."""
        old = self._event()
        ChangeEvent.objects.filter(pk=old.pk).update(created_at=timezone.now() - timedelta(hours=5))
        out = StringIO()
        call_command('prune_change_events', hours=1, stdout=out)
        self.assertIn('Deleted 1 change event(s).', out.getvalue())


@override_settings(REALTIME_STREAM_TIMEOUT=0, REALTIME_POLL_INTERVAL=0)
class RealtimeViewTest(TestCase, BaseTestMixin):

    def setUp(self):
        self.client.force_login(self.create_user())

    def test_poll_without_cursor(self):
        """T13: First poll returns only the current cursor."""
        event = ChangeEvent.objects.create(table='notes', action='INSERT', object_id=1)
        response = self.client.get(reverse('realtime:poll'))
        self.assertEqual(response.json(), {'events': [], 'cursor': event.pk})

    def test_poll_since(self):
        """T14: Events after the cursor are returned with the new cursor."""
        first = ChangeEvent.objects.create(table='notes', action='INSERT', object_id=1)
        second = ChangeEvent.objects.create(table='departments', action='DELETE', object_id=2)
        response = self.client.get(reverse('realtime:poll'), {'since': first.pk, 'tables': 'departments'})
        data = response.json()
        self.assertEqual(data['cursor'], second.pk)
        self.assertEqual([e['table'] for e in data['events']], ['departments'])

    def test_stream_resumes_from_last_event_id(self):
        """T15: The stream honours Last-Event-ID."""
        first = ChangeEvent.objects.create(table='notes', action='INSERT', object_id=1)
        second = ChangeEvent.objects.create(table='notes', action='UPDATE', object_id=1)
        response = self.client.get(reverse('realtime:stream'), HTTP_LAST_EVENT_ID=str(first.pk))
        self.assertEqual(response['Content-Type'], 'text/event-stream')
        body = b''.join(response.streaming_content).decode()
        self.assertIn(f'id: {second.pk}\n', body)
        self.assertNotIn(f'id: {first.pk}\n', body)

    def test_login_required(self):
        """T16: Anonymous clients are redirected."""
        self.client.logout()
        self.assertEqual(self.client.get(reverse('realtime:poll')).status_code, 302)
