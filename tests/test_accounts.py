"""
Accounts tests: user model, forms, auth views, profile and user management
"""

from django.core import mail
from django.contrib.auth.tokens import default_token_generator
from django.db import IntegrityError, transaction
from django.test import TestCase, override_settings
from django.urls import reverse
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

from apps.accounts.admin import AdminUserChangeForm, AdminUserCreationForm
from apps.accounts.forms import NewPasswordForm, ProfileUpdateForm, RegisterForm
from apps.accounts.models import UserActivity
from apps.accounts.services import UserDeletionError, UserService
from apps.core.models import AuditLog
from .base import BaseTestMixin, DEFAULT_PASSWORD, User


class UserModelTest(TestCase, BaseTestMixin):

    def test_user_creation(self):
        """T01: User is created with a lowercased email and a hashed password."""
        user = self.create_user(email='Student@Example.COM')
        self.assertEqual(user.email, 'student@example.com')
        self.assertTrue(user.check_password(DEFAULT_PASSWORD))

    def test_role_detection(self):
        """T02: Role helpers."""
        student = self.create_user()
        faculty = self.create_faculty()
        admin = self.create_admin_user()
        self.assertTrue(student.is_student())
        self.assertFalse(student.is_faculty())
        self.assertTrue(faculty.is_faculty())
        self.assertTrue(admin.is_admin())
        self.assertFalse(faculty.is_admin())

    def test_superuser_is_admin(self):
        """T03: Superusers count as admins."""
        user = User.objects.create_superuser(email='root@example.com', password='x' * 8, name='Root')
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_admin())

    def test_department_name(self):
        """T04: department_name is empty until a department is set."""
        user = self.create_user()
        self.assertEqual(user.department_name, '')
        self.assertFalse(user.has_complete_profile())
        user.department = self.create_department('Physics')
        user.save()
        self.assertEqual(user.department_name, 'Physics')
        self.assertTrue(user.has_complete_profile())

    def test_department_delete_clears_member(self):
        """T05: Deleting a department keeps its members with no department."""
        department = self.create_department()
        user = self.create_user(department=department)
        department.delete()
        user.refresh_from_db()
        self.assertIsNone(user.department_id)


class RegisterFormTest(TestCase, BaseTestMixin):

    def _data(self, **overrides):
        data = {
            'name': 'New Student',
            'email': 'new@example.com',
            'role': 'student',
            'password1': 'secret1',
            'password2': 'secret1',
        }
        data.update(overrides)
        return data

    def test_valid_form(self):
        """T06: Valid registration saves a usable password."""
        form = RegisterForm(data=self._data())
        self.assertTrue(form.is_valid(), form.errors)
        user = form.save()
        self.assertTrue(user.check_password('secret1'))

    def test_password_mismatch(self):
        """T07: Mismatched passwords are rejected."""
        form = RegisterForm(data=self._data(password2='other11'))
        self.assertFalse(form.is_valid())
        self.assertIn('Passwords do not match.', str(form.errors))

    def test_short_password(self):
        """T08: Passwords under six characters are rejected."""
        form = RegisterForm(data=self._data(password1='abc', password2='abc'))
        self.assertFalse(form.is_valid())
        self.assertIn('Password must be at least 6 characters long.', str(form.errors))

    def test_duplicate_email(self):
        """T09: Emails are unique regardless of case."""
        self.create_user(email='new@example.com')
        form = RegisterForm(data=self._data(email='NEW@example.com'))
        self.assertFalse(form.is_valid())
        self.assertIn('An account with this email already exists.', str(form.errors))

    def test_admin_role_not_selectable(self):
        """T10: Visitors cannot register as admins."""
        form = RegisterForm(data=self._data(role='admin'))
        self.assertFalse(form.is_valid())
        self.assertIn('role', form.errors)


class ProfileUpdateFormTest(TestCase, BaseTestMixin):

    def test_subject_taught_only_for_faculty(self):
        """T11: Students do not see the subject field."""
        student_form = ProfileUpdateForm(instance=self.create_user())
        faculty_form = ProfileUpdateForm(instance=self.create_faculty())
        self.assertNotIn('subject_taught', student_form.fields)
        self.assertIn('subject_taught', faculty_form.fields)

    def test_set_department(self):
        """T12: Choosing a department completes the profile."""
        department = self.create_department()
        user = self.create_user()
        form = ProfileUpdateForm(
            data={'name': 'Renamed', 'mobile_number': '', 'department': department.pk},
            instance=user,
        )
        self.assertTrue(form.is_valid(), form.errors)
        form.save()
        user.refresh_from_db()
        self.assertEqual(user.department, department)
        self.assertEqual(user.name, 'Renamed')


class NewPasswordFormTest(TestCase, BaseTestMixin):

    def test_valid_form(self):
        """T13: New password is saved."""
        user = self.create_user()
        form = NewPasswordForm(user, data={'new_password1': 'another1', 'new_password2': 'another1'})
        self.assertTrue(form.is_valid(), form.errors)
        form.save()
        user.refresh_from_db()
        self.assertTrue(user.check_password('another1'))

    def test_password_mismatch(self):
        """T14: Mismatch is reported."""
        form = NewPasswordForm(self.create_user(), data={'new_password1': 'another1', 'new_password2': 'another2'})
        self.assertFalse(form.is_valid())


class AuthViewTest(TestCase, BaseTestMixin):

    def test_register_redirects_to_login(self):
        """T15: Registration creates the account and sends the visitor to log in."""
        response = self.client.post(reverse('accounts:register'), {
            'name': 'Fresh Faculty',
            'email': 'fresh@example.com',
            'role': 'faculty',
            'password1': 'secret1',
            'password2': 'secret1',
        })
        self.assertRedirects(response, reverse('accounts:login'))
        user = User.objects.get(email='fresh@example.com')
        self.assertTrue(user.is_faculty())
        self.assertTrue(UserActivity.objects.filter(user=user, activity_type='register').exists())

    def test_login_success(self):
        """T16: Login redirects to the role dashboard and records the activity."""
        user = self.create_user()
        response = self.client.post(reverse('accounts:login'), {
            'username': user.email,
            'password': DEFAULT_PASSWORD,
        })
        self.assertRedirects(response, reverse('core:dashboard_redirect'), fetch_redirect_response=False)
        self.assertTrue(UserActivity.objects.filter(user=user, activity_type='login').exists())

    def test_login_failure(self):
        """T17: Wrong password re-renders the form."""
        user = self.create_user()
        response = self.client.post(reverse('accounts:login'), {
            'username': user.email,
            'password': 'wrong-password',
        })
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'accounts/login.html')
        self.assertNotIn('_auth_user_id', self.client.session)

    def test_login_ignores_external_next(self):
        """T18: An off-site next URL is ignored."""
        user = self.create_user()
        response = self.client.post(
            reverse('accounts:login') + '?next=https://evil.example.com/',
            {'username': user.email, 'password': DEFAULT_PASSWORD},
        )
        self.assertEqual(response.status_code, 302)
        self.assertNotIn('evil.example.com', response['Location'])

    def test_logout(self):
        """T19: Logout ends the session."""
        user = self.create_user()
        self.client.force_login(user)
        response = self.client.post(reverse('accounts:logout'))
        self.assertEqual(response.status_code, 302)
        self.assertNotIn('_auth_user_id', self.client.session)


@override_settings(EMAIL_BACKEND='django.core.mail.backends.locmem.EmailBackend')
class PasswordResetTest(TestCase, BaseTestMixin):

    def test_request_sends_mail(self):
        """T20: A known email receives a reset link."""
        user = self.create_user()
        response = self.client.post(reverse('accounts:password_reset_request'), {'email': user.email})
        self.assertEqual(response.status_code, 302)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn('/accounts/password-reset/', mail.outbox[0].body)

    def test_request_unknown_email(self):
        """T21: Unknown emails get the same response and no mail."""
        response = self.client.post(reverse('accounts:password_reset_request'), {'email': 'nobody@example.com'})
        self.assertEqual(response.status_code, 302)
        self.assertEqual(len(mail.outbox), 0)

    def test_confirm_sets_password(self):
        """T22: A valid link lets the user choose a new password."""
        user = self.create_user()
        url = reverse('accounts:password_reset_confirm', kwargs={
            'uidb64': urlsafe_base64_encode(force_bytes(user.pk)),
            'token': default_token_generator.make_token(user),
        })
        response = self.client.post(url, {'new_password1': 'brandnew', 'new_password2': 'brandnew'})
        self.assertRedirects(response, reverse('accounts:login'))
        user.refresh_from_db()
        self.assertTrue(user.check_password('brandnew'))

    def test_confirm_bad_token(self):
        """T23: A tampered link is refused."""
        user = self.create_user()
        url = reverse('accounts:password_reset_confirm', kwargs={
            'uidb64': urlsafe_base64_encode(force_bytes(user.pk)),
            'token': 'bad-token',
        })
        response = self.client.get(url)
        self.assertRedirects(response, reverse('accounts:password_reset_request'))


class ProfileViewTest(TestCase, BaseTestMixin):

    def setUp(self):
        self.user = self.create_user()
        self.client.force_login(self.user)

    def test_profile_get(self):
        """T24: Profile page renders on the dashboard layout."""
        response = self.client.get(reverse('accounts:profile'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'accounts/profile.html')
        self.assertTemplateUsed(response, 'layouts/dashboard_base.html')

    def test_profile_update_post(self):
        """T25: Profile update saves and records the activity."""
        department = self.create_department()
        response = self.client.post(reverse('accounts:profile'), {
            'name': 'Updated Name',
            'mobile_number': '0100',
            'department': department.pk,
        })
        self.assertRedirects(response, reverse('accounts:profile'))
        self.user.refresh_from_db()
        self.assertEqual(self.user.department, department)
        self.assertTrue(UserActivity.objects.filter(user=self.user, activity_type='profile_update').exists())

    def test_change_password_post(self):
        """T26: Password change keeps the session alive."""
        response = self.client.post(reverse('accounts:change_password'), {
            'new_password1': 'changed1',
            'new_password2': 'changed1',
        })
        self.assertRedirects(response, reverse('accounts:profile'))
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('changed1'))
        self.assertEqual(self.client.get(reverse('accounts:profile')).status_code, 200)

    def test_profile_login_required(self):
        """T27: Anonymous visitors are sent to login."""
        self.client.logout()
        response = self.client.get(reverse('accounts:profile'))
        self.assertEqual(response.status_code, 302)
        self.assertIn(reverse('accounts:login'), response['Location'])


class UserManagementTest(TestCase, BaseTestMixin):

    def setUp(self):
        self.admin = self.create_admin_user()
        self.student = self.create_user()

    def test_list_users_ordered(self):
        """T28: Users are listed by name."""
        self.create_faculty(name='Aaron Faculty')
        names = [u.name for u in UserService.list_users()]
        self.assertEqual(names, sorted(names))

    def test_admin_cannot_delete_self(self):
        """T29: Self-deletion is refused."""
        with self.assertRaises(UserDeletionError) as ctx:
            UserService.delete_user(self.admin, self.admin)
        self.assertEqual(str(ctx.exception), UserService.SELF_DELETE_MESSAGE)

    def test_delete_user_view(self):
        """T30: Admin deletes a user and the action is audited."""
        self.client.force_login(self.admin)
        response = self.client.post(reverse('accounts:user_delete', args=[self.student.pk]))
        self.assertRedirects(response, reverse('core:admin_dashboard'))
        self.assertFalse(User.objects.filter(pk=self.student.pk).exists())
        self.assertTrue(AuditLog.objects.filter(action='delete', model_name='User').exists())

    def test_delete_self_view(self):
        """T31: The view reports self-deletion as an error."""
        self.client.force_login(self.admin)
        response = self.client.post(reverse('accounts:user_delete', args=[self.admin.pk]), follow=True)
        self.assertTrue(User.objects.filter(pk=self.admin.pk).exists())
        self.assertContains(response, 'Admins cannot delete their own account for safety reasons.')

    def test_non_admin_forbidden(self):
        """T32: Students cannot delete users or list them."""
        self.client.force_login(self.student)
        other = self.create_user(email='other@example.com')
        self.assertEqual(self.client.post(reverse('accounts:user_delete', args=[other.pk])).status_code, 403)
        self.assertEqual(self.client.get(reverse('accounts:user_rows')).status_code, 403)

    def test_user_rows_fragment(self):
        """T33: The user fragment lists every account."""
        self.client.force_login(self.admin)
        response = self.client.get(reverse('accounts:user_rows'))
        self.assertContains(response, self.student.email)
        self.assertTemplateUsed(response, 'accounts/partials/user_rows.html')


class AdminUserFormTest(TestCase, BaseTestMixin):

    def _creation_form(self, email):
        return AdminUserCreationForm(data={
            'email': email,
            'name': 'Bob',
            'role': 'student',
            'password1': DEFAULT_PASSWORD,
            'password2': DEFAULT_PASSWORD,
        })

    def test_creation_form_lowercases_email(self):
        """T34: Accounts created in the admin can log in with any casing."""
        form = self._creation_form('Bob@Example.com')
        self.assertTrue(form.is_valid(), form.errors)
        user = form.save()
        self.assertEqual(user.email, 'bob@example.com')

        response = self.client.post(reverse('accounts:login'), {
            'username': 'Bob@Example.com',
            'password': DEFAULT_PASSWORD,
        })
        self.assertRedirects(response, reverse('core:dashboard_redirect'), fetch_redirect_response=False)
        self.assertEqual(int(self.client.session['_auth_user_id']), user.pk)

    def test_creation_form_rejects_case_variant(self):
        """T35: The admin cannot add a second account differing only in case."""
        self.create_user(email='bob@example.com')
        form = self._creation_form('BOB@example.com')
        self.assertFalse(form.is_valid())
        self.assertIn('email', form.errors)
        self.assertEqual(User.objects.filter(email__iexact='bob@example.com').count(), 1)

    def test_change_form_email_rules(self):
        """T36: Editing keeps the own address but refuses another account's."""
        self.create_user(email='bob@example.com')
        alice = self.create_user(email='alice@example.com', name='Alice')
        taken = AdminUserChangeForm(instance=alice, data={'email': 'Bob@Example.com'})
        self.assertIn('email', taken.errors)
        own = AdminUserChangeForm(instance=alice, data={'email': 'ALICE@example.com'})
        self.assertNotIn('email', own.errors)

    def test_save_lowercases_and_constraint_holds(self):
        """T37: Every save stores a lowercased email; the database refuses case variants."""
        user = User(email='  Carol@Example.COM ', name='Carol')
        user.set_password(DEFAULT_PASSWORD)
        user.save()
        user.refresh_from_db()
        self.assertEqual(user.email, 'carol@example.com')

        other = self.create_user(email='dave@example.com')
        with transaction.atomic(), self.assertRaises(IntegrityError):
            User.objects.filter(pk=other.pk).update(email='CAROL@example.com')
