"""
Accounts forms
NoteShare - Department Note-Sharing Portal

- LoginForm: email + password + remember me
- RegisterForm: self-service sign-up (student or faculty only)
- ProfileUpdateForm: name, mobile, department, subject taught
- NewPasswordForm: new password + confirmation (change and reset)
- PasswordResetRequestForm: email lookup for the reset link
"""

from django import forms
from django.contrib.auth.forms import AuthenticationForm

from apps.departments.models import Department
from .models import User

MIN_PASSWORD_LENGTH = 6


def validate_new_password(password1, password2):
    """Shared password rules: both entries match and are long enough."""
    if password1 != password2:
        raise forms.ValidationError('Passwords do not match.')
    if len(password1 or '') < MIN_PASSWORD_LENGTH:
        raise forms.ValidationError(
            f'Password must be at least {MIN_PASSWORD_LENGTH} characters long.'
        )


class LoginForm(AuthenticationForm):
    """Email login form."""

    username = forms.EmailField(
        label='Email',
        widget=forms.EmailInput(attrs={
            'class': 'form-control',
            'placeholder': 'you@example.com',
            'autofocus': True,
        })
    )
    password = forms.CharField(
        label='Password',
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': 'form-control',
            'placeholder': 'Password',
        })
    )
    remember_me = forms.BooleanField(
        label='Remember me',
        required=False,
        widget=forms.CheckboxInput(attrs={'class': 'form-check-input'})
    )

    error_messages = {
        'invalid_login': 'Invalid email or password.',
        'inactive': 'This account is inactive.',
    }

    def clean_username(self):
        return self.cleaned_data['username'].strip().lower()


class RegisterForm(forms.ModelForm):
    """Self-service registration. Admin accounts are created by admins only."""

    role = forms.ChoiceField(
        label='I am a',
        choices=[(r.value, r.label) for r in User.SELF_SERVICE_ROLES],
        initial=User.Role.STUDENT,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    password1 = forms.CharField(
        label='Password',
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )
    password2 = forms.CharField(
        label='Confirm password',
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )

    class Meta:
        model = User
        fields = ['name', 'email', 'role']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Full name'}),
            'email': forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'you@example.com'}),
        }

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if not name:
            raise forms.ValidationError('Name is required.')
        return name

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError('An account with this email already exists.')
        return email

    def clean(self):
        cleaned_data = super().clean()
        password1 = cleaned_data.get('password1')
        password2 = cleaned_data.get('password2')
        if password1 is not None and password2 is not None:
            try:
                validate_new_password(password1, password2)
            except forms.ValidationError as e:
                self.add_error('password2', e)
        return cleaned_data

    def save(self, commit=True):
        user = super().save(commit=False)
        user.set_password(self.cleaned_data['password1'])
        if commit:
            user.save()
        return user


class ProfileUpdateForm(forms.ModelForm):
    """Profile editing; an empty department clears the current one."""

    department = forms.ModelChoiceField(
        label='Department',
        queryset=Department.objects.order_by('name'),
        required=False,
        empty_label='-- Select department --',
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    class Meta:
        model = User
        fields = ['name', 'mobile_number', 'department', 'subject_taught']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'mobile_number': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Optional'}),
            'subject_taught': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.instance.is_faculty():
            del self.fields['subject_taught']

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if not name:
            raise forms.ValidationError('Name is required.')
        return name


class NewPasswordForm(forms.Form):
    """New password with confirmation, bound to a user."""

    new_password1 = forms.CharField(
        label='New password',
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )
    new_password2 = forms.CharField(
        label='Confirm new password',
        strip=False,
        widget=forms.PasswordInput(attrs={'class': 'form-control'})
    )

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned_data = super().clean()
        password1 = cleaned_data.get('new_password1')
        password2 = cleaned_data.get('new_password2')
        if password1 is not None and password2 is not None:
            validate_new_password(password1, password2)
        return cleaned_data

    def save(self):
        self.user.set_password(self.cleaned_data['new_password1'])
        self.user.save(update_fields=['password'])
        return self.user


class PasswordResetRequestForm(forms.Form):
    """Looks up the account; unknown emails are not reported back."""

    email = forms.EmailField(
        label='Email',
        widget=forms.EmailInput(attrs={'class': 'form-control', 'placeholder': 'you@example.com'})
    )

    def clean_email(self):
        email = self.cleaned_data['email'].strip().lower()
        self.user = User.objects.filter(email__iexact=email, is_active=True).first()
        return email
