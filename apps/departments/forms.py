"""
Department forms
NoteShare - Department Note-Sharing Portal
"""

from django import forms


class DepartmentForm(forms.Form):
    """Name entry for creating or renaming a department."""

    name = forms.CharField(
        label='Department name',
        max_length=150,
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'e.g. Computer Science',
        })
    )
