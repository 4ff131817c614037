"""
Role-based sidebar menu
NoteShare - Department Note-Sharing Portal

Every item names the roles that may see it; get_menu_for_user() returns
the visible items in display order.
"""

from dataclasses import dataclass, field
from typing import List, Tuple
from django.urls import reverse, NoReverseMatch


@dataclass
class MenuItem:
    """
    One sidebar entry.

    Attributes:
        code: unique id, also matched against the page's active_page
        icon: Bootstrap Icons class (e.g. 'bi-house')
        label: text shown in the sidebar
        url_name: URL name to reverse (e.g. 'notes:student_dashboard')
        roles: roles allowed to see the item (empty = every signed-in user)
        order: display order
    """
    code: str
    icon: str
    label: str
    url_name: str = ''
    roles: Tuple[str, ...] = field(default_factory=tuple)
    order: int = 0

    def get_url(self) -> str:
        if not self.url_name:
            return '#'
        try:
            return reverse(self.url_name)
        except NoReverseMatch:
            return '#'

    def is_visible_to(self, user) -> bool:
        if not self.roles:
            return True
        if user.is_admin():
            return 'admin' in self.roles
        return user.role in self.roles


MENU_ITEMS = [
    MenuItem(
        code='dashboard',
        icon='bi-house-door',
        label='Dashboard',
        url_name='core:dashboard_redirect',
        order=0,
    ),
    MenuItem(
        code='upload',
        icon='bi-cloud-upload',
        label='Upload note',
        url_name='notes:upload',
        roles=('faculty',),
        order=10,
    ),
    MenuItem(
        code='departments',
        icon='bi-diagram-3',
        label='Departments',
        url_name='departments:list',
        roles=('admin',),
        order=20,
    ),
    MenuItem(
        code='profile',
        icon='bi-person-circle',
        label='My profile',
        url_name='accounts:profile',
        order=80,
    ),
    MenuItem(
        code='change_password',
        icon='bi-key',
        label='Change password',
        url_name='accounts:change_password',
        order=90,
    ),
]


def get_menu_for_user(user) -> List[MenuItem]:
    """Visible menu items for a signed-in user, in display order."""
    if not user.is_authenticated:
        return []
    items = [item for item in MENU_ITEMS if item.is_visible_to(user)]
    return sorted(items, key=lambda item: item.order)
