"""
Template context processors
NoteShare - Department Note-Sharing Portal
"""

from django.conf import settings

from .menu import get_menu_for_user


def site_settings(request):
    return {
        'SITE_NAME': 'NoteShare',
        'SITE_FULL_NAME': 'Department Note-Sharing Portal',
        'SITE_VERSION': '1.0.0',
        'DEBUG': settings.DEBUG,
    }


def user_role_info(request):
    """Role flags and the sidebar menu for the current user."""
    user = request.user
    if user.is_authenticated:
        return {
            'user_role': user.get_role_display(),
            'user_role_code': user.role,
            'is_admin': user.is_admin(),
            'is_faculty': user.is_faculty(),
            'is_student': user.is_student(),
            'menu_items': get_menu_for_user(user),
        }
    return {
        'user_role': None,
        'user_role_code': None,
        'is_admin': False,
        'is_faculty': False,
        'is_student': False,
        'menu_items': [],
    }
