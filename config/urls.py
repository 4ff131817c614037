"""
URL configuration for the NoteShare portal.
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    # Django Admin
    path('site-admin/', admin.site.urls),

    # Core App (Home, Dashboard redirect, Admin dashboard)
    path('', include('apps.core.urls')),

    # Accounts App (Authentication, Profile, User management)
    path('accounts/', include('apps.accounts.urls')),

    # Departments App (Admin CRUD)
    path('departments/', include('apps.departments.urls')),

    # Notes App (Dashboards, upload, download)
    path('notes/', include('apps.notes.urls')),

    # Realtime change feed (SSE + polling)
    path('realtime/', include('apps.realtime.urls')),

    # AI quiz generation
    path('quizzes/', include('apps.quizzes.urls')),
]

# Admin site customization
admin.site.site_header = "NoteShare Administration"
admin.site.site_title = "NoteShare Admin"
admin.site.index_title = "Welcome to the NoteShare portal administration"
