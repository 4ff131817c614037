"""
Template tags for roles and the sidebar

Usage in templates:
    {% load portal_tags %}

    <span class="badge {{ user.role|role_badge }}">{{ user.get_role_display }}</span>

    {% render_sidebar %}
"""

from pathlib import PurePosixPath

from django import template

register = template.Library()

ROLE_BADGE_CLASSES = {
    'admin': 'bg-danger',
    'faculty': 'bg-success',
    'student': 'bg-primary',
}


@register.filter
def role_badge(role):
    """Bootstrap badge class for a role code."""
    return ROLE_BADGE_CLASSES.get(role, 'bg-secondary')


@register.filter
def file_extension(path):
    """'12/1700000000000.pdf' -> 'PDF'"""
    return PurePosixPath(path or '').suffix.lstrip('.').upper()


@register.inclusion_tag('components/sidebar.html', takes_context=True)
def render_sidebar(context):
    """
    Render the sidebar, marking the current page's item as active.

    Pages name themselves with an 'active_page' context variable; when it
    is missing, the item whose URL prefixes the request path wins.
    """
    request = context.get('request')
    menu_items = context.get('menu_items', [])
    current_item = context.get('active_page')

    if current_item is None and request is not None:
        for item in menu_items:
            url = item.get_url()
            if url != '#' and request.path.startswith(url):
                current_item = item.code
                break

    return {
        'menu_items': menu_items,
        'current_item': current_item,
    }
