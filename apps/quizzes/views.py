"""
Quiz views
NoteShare - Department Note-Sharing Portal
"""

import logging

from django.core.exceptions import PermissionDenied
from django.http import JsonResponse
from django.shortcuts import render
from django.views import View

from apps.accounts.models import UserActivity
from apps.accounts.views.mixins import StudentRequiredMixin
from apps.notes.mixins import SecureNoteMixin
from .services import QuizError, QuizService

logger = logging.getLogger('quizzes')


class GenerateQuizView(SecureNoteMixin, StudentRequiredMixin, View):
    """
    Build a multiple-choice quiz from one of the student's department notes.

    htmx requests get the rendered quiz fragment, everything else gets
    JSON: {"questions": [...]} or {"error": "..."}.
    """
    template_name = 'quizzes/partials/quiz.html'

    def _is_htmx(self):
        return self.request.headers.get('HX-Request') == 'true'

    def _error(self, note, message, status):
        if self._is_htmx():
            return render(self.request, self.template_name,
                          {'note': note, 'error': message}, status=status)
        return JsonResponse({'error': message}, status=status)

    def post(self, request, pk):
        try:
            note = self.get_secure_note(pk)
        except PermissionDenied as e:
            return self._error(None, str(e), 403)

        try:
            questions = QuizService.generate(request.user, note)
        except QuizError as e:
            return self._error(note, str(e), e.status_code)

        UserActivity.record(request, 'quiz', f'Generated quiz for note: {note.title}', note_id=note.pk)

        if self._is_htmx():
            return render(request, self.template_name, {'note': note, 'questions': questions})
        return JsonResponse({'questions': [q.to_dict() for q in questions]})
