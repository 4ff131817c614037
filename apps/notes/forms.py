"""
Note forms
NoteShare - Department Note-Sharing Portal

- NoteUploadForm: title + file (faculty)
- NoteFilterForm: query-string binding for the student filter bar
"""

from django import forms
from django.conf import settings

from .filters import NoteFilterCriteria


class NoteUploadForm(forms.Form):
    title = forms.CharField(
        label='Note title',
        max_length=255,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'e.g. Week 3 - Linked lists',
        })
    )
    file = forms.FileField(
        label='File',
        widget=forms.ClearableFileInput(attrs={
            'class': 'form-control',
            'accept': ','.join(getattr(settings, 'ALLOWED_NOTE_EXTENSIONS', [])),
        })
    )


class NoteFilterForm(forms.Form):
    """
    Student filter bar.

    Every field is optional; invalid values are dropped rather than
    reported, so a bad date simply leaves that bound open.
    """

    search = forms.CharField(
        label='Search',
        required=False,
        widget=forms.TextInput(attrs={
            'class': 'form-control',
            'placeholder': 'Search by title...',
            'type': 'search',
        })
    )
    faculty = forms.TypedChoiceField(
        label='Faculty',
        required=False,
        coerce=int,
        empty_value=None,
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    start_date = forms.DateField(
        label='From',
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )
    end_date = forms.DateField(
        label='To',
        required=False,
        widget=forms.DateInput(attrs={'class': 'form-control', 'type': 'date'})
    )

    def __init__(self, *args, faculties=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['faculty'].choices = [('', 'All faculty')] + [
            (str(faculty_id), name) for faculty_id, name in faculties
        ]

    def to_criteria(self) -> NoteFilterCriteria:
        if not self.is_bound:
            return NoteFilterCriteria()
        self.is_valid()
        data = self.cleaned_data
        return NoteFilterCriteria(
            search=data.get('search') or '',
            faculty_id=data.get('faculty'),
            start_date=data.get('start_date'),
            end_date=data.get('end_date'),
        )
