"""
Department tests: service rules and admin CRUD views
"""

import tempfile

from django.test import TestCase, override_settings
from django.urls import reverse

from apps.core.models import AuditLog
from apps.departments.models import Department
from apps.departments.services import DepartmentError, DepartmentService
from .base import BaseTestMixin


class DepartmentServiceTest(TestCase, BaseTestMixin):

    def test_create_strips_name(self):
        """T01: Names are trimmed before saving."""
        department = DepartmentService.create('  Mathematics  ')
        self.assertEqual(department.name, 'Mathematics')

    def test_create_empty_name(self):
        """T02: Blank names are rejected."""
        with self.assertRaises(DepartmentError) as ctx:
            DepartmentService.create('   ')
        self.assertEqual(str(ctx.exception), 'Department name cannot be empty.')

    def test_create_duplicate_case_insensitive(self):
        """T03: Duplicates are detected regardless of case."""
        DepartmentService.create('Physics')
        with self.assertRaises(DepartmentError) as ctx:
            DepartmentService.create('physics')
        self.assertEqual(str(ctx.exception), 'Department "physics" already exists.')

    def test_rename(self):
        """T04: Rename keeps the id and may change only the case."""
        department = DepartmentService.create('chemistry')
        DepartmentService.rename(department, 'Chemistry')
        department.refresh_from_db()
        self.assertEqual(department.name, 'Chemistry')

    def test_rename_to_existing(self):
        """T05: Rename cannot collide with another department."""
        DepartmentService.create('Biology')
        department = DepartmentService.create('Botany')
        with self.assertRaises(DepartmentError):
            DepartmentService.rename(department, 'BIOLOGY')

    def test_list_sorted(self):
        """T06: Departments are listed by name."""
        for name in ('Zoology', 'Art', 'Music'):
            DepartmentService.create(name)
        names = [d.name for d in DepartmentService.list_departments()]
        self.assertEqual(names, ['Art', 'Music', 'Zoology'])

    def test_delete_empty_department(self):
        """T07: A department without notes is deleted."""
        department = DepartmentService.create('History')
        DepartmentService.delete(department)
        self.assertFalse(Department.objects.filter(name='History').exists())

    def test_name_length_limit(self):
        """T16: Names longer than 150 characters are refused on create and rename."""
        with self.assertRaises(DepartmentError) as ctx:
            DepartmentService.create('X' * 151)
        self.assertIn('longer than 150', str(ctx.exception))
        self.assertFalse(Department.objects.exists())

        department = DepartmentService.create('X' * 150)
        with self.assertRaises(DepartmentError):
            DepartmentService.rename(department, 'Y' * 151)
        department.refresh_from_db()
        self.assertEqual(department.name, 'X' * 150)


@override_settings(MEDIA_ROOT=tempfile.mkdtemp())
class DepartmentWithNotesTest(TestCase, BaseTestMixin):

    def test_delete_refused_while_notes_exist(self):
        """T08: A department that still owns notes is kept."""
        department = self.create_department()
        faculty = self.create_faculty(department=department)
        self.upload_note(faculty)
        with self.assertRaises(DepartmentError) as ctx:
            DepartmentService.delete(department)
        self.assertIn('still has 1 note(s)', str(ctx.exception))
        self.assertTrue(Department.objects.filter(pk=department.pk).exists())


class DepartmentViewTest(TestCase, BaseTestMixin):

    def setUp(self):
        self.admin = self.create_admin_user()
        self.client.force_login(self.admin)

    def test_list_page(self):
        """T09: Admin sees the department page."""
        self.create_department('Economics')
        response = self.client.get(reverse('departments:list'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'departments/list.html')
        self.assertContains(response, 'Economics')

    def test_create_view(self):
        """T10: Creating a department is audited."""
        response = self.client.post(reverse('departments:create'), {'name': 'Geology'})
        self.assertRedirects(response, reverse('departments:list'))
        department = Department.objects.get(name='Geology')
        self.assertTrue(AuditLog.objects.filter(
            action='create', model_name='Department', object_id=department.pk
        ).exists())

    def test_create_duplicate_view(self):
        """T11: Duplicate name shows an error message."""
        self.create_department('Geology')
        response = self.client.post(reverse('departments:create'), {'name': 'GEOLOGY'}, follow=True)
        self.assertContains(response, 'Department &quot;GEOLOGY&quot; already exists.')
        self.assertEqual(Department.objects.filter(name__iexact='geology').count(), 1)

    def test_update_view(self):
        """T12: Rename through the view."""
        department = self.create_department('Old Name')
        self.client.post(reverse('departments:update', args=[department.pk]), {'name': 'New Name'})
        department.refresh_from_db()
        self.assertEqual(department.name, 'New Name')

    def test_delete_view(self):
        """T13: Delete through the view."""
        department = self.create_department('Temporary')
        self.client.post(reverse('departments:delete', args=[department.pk]))
        self.assertFalse(Department.objects.filter(pk=department.pk).exists())

    def test_rows_fragment(self):
        """T14: HTMX rows fragment."""
        self.create_department('Statistics')
        response = self.client.get(reverse('departments:rows'))
        self.assertTemplateUsed(response, 'departments/partials/rows.html')
        self.assertContains(response, 'Statistics')

    def test_non_admin_forbidden(self):
        """T15: Faculty cannot manage departments."""
        self.client.force_login(self.create_faculty())
        self.assertEqual(self.client.get(reverse('departments:list')).status_code, 403)
        self.assertEqual(self.client.post(reverse('departments:create'), {'name': 'X'}).status_code, 403)

    def test_create_view_too_long(self):
        """T17: An over-long name reports the length error, not an empty name."""
        response = self.client.post(reverse('departments:create'), {'name': 'X' * 151}, follow=True)
        self.assertContains(response, 'at most 150 characters')
        self.assertNotContains(response, DepartmentService.EMPTY_NAME_MESSAGE)
        self.assertFalse(Department.objects.exists())

    def test_update_view_too_long(self):
        """T18: Renaming to an over-long name keeps the old one."""
        department = self.create_department('Physics')
        response = self.client.post(
            reverse('departments:update', args=[department.pk]), {'name': 'Y' * 151}, follow=True
        )
        self.assertContains(response, 'at most 150 characters')
        department.refresh_from_db()
        self.assertEqual(department.name, 'Physics')
