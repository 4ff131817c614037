"""
Notes URLs
"""

from django.urls import path
from . import views

app_name = 'notes'

urlpatterns = [
    # Student
    path('student/', views.StudentDashboardView.as_view(), name='student_dashboard'),
    path('student/list/', views.StudentNoteListView.as_view(), name='student_list'),

    # Faculty
    path('faculty/', views.FacultyDashboardView.as_view(), name='faculty_dashboard'),
    path('faculty/list/', views.FacultyNoteListView.as_view(), name='faculty_list'),
    path('upload/', views.NoteUploadView.as_view(), name='upload'),

    # Admin
    path('all/rows/', views.AdminNoteRowsView.as_view(), name='admin_rows'),

    # Shared note operations (access checked per note)
    path('<int:pk>/download/', views.NoteDownloadView.as_view(), name='download'),
    path('<int:pk>/preview/', views.NotePreviewView.as_view(), name='preview'),
    path('<int:pk>/delete/', views.NoteDeleteView.as_view(), name='delete'),
]
