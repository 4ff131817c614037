"""
In-memory note filtering
NoteShare - Department Note-Sharing Portal

The student dashboard loads its department's notes once and narrows the
list here: title search, uploader, and an inclusive date window. Dates are
whole days in the active time zone: the start day counts from 00:00 and
the end day runs through 23:59:59.999999.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Iterable, List, Optional, Tuple

from django.utils import timezone


@dataclass
class NoteFilterCriteria:
    search: str = ''
    faculty_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return bool(
            self.search.strip()
            or self.faculty_id is not None
            or self.start_date
            or self.end_date
        )


def _day_bound(day: date, bound: time) -> datetime:
    return timezone.make_aware(datetime.combine(day, bound), timezone.get_current_timezone())


def filter_notes(notes: Iterable, criteria: NoteFilterCriteria) -> List:
    """Apply every set criterion; unset ones match everything."""
    term = criteria.search.strip().lower()
    start = _day_bound(criteria.start_date, time.min) if criteria.start_date else None
    end = _day_bound(criteria.end_date, time.max) if criteria.end_date else None

    result = []
    for note in notes:
        if term and term not in note.title.lower():
            continue
        if criteria.faculty_id is not None and note.faculty_id != criteria.faculty_id:
            continue
        if start is not None and note.created_at < start:
            continue
        if end is not None and note.created_at > end:
            continue
        result.append(note)
    return result


def unique_faculties(notes: Iterable) -> List[Tuple[int, str]]:
    """Distinct (faculty_id, name) pairs for the uploader dropdown, by name."""
    seen = {}
    for note in notes:
        if note.faculty_id not in seen:
            seen[note.faculty_id] = note.faculty_name
    return sorted(seen.items(), key=lambda pair: pair[1].lower())
