"""
API permissions.
"""

from django.conf import settings
from rest_framework.permissions import BasePermission


class IsCatalogAdmin(BasePermission):
    """
    Staff users and members of ``ECODE_ADMIN_GROUP``.

    Guards destructive bulk actions (bulk import, replace-all, bulk delete).
    """

    message = '관리자 권한이 필요합니다.'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if user.is_staff or user.is_superuser:
            return True
        return user.groups.filter(name=settings.ECODE_ADMIN_GROUP).exists()
