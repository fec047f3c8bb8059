from rest_framework import permissions


class IsStaffOrReadOnly(permissions.BasePermission):
    """
    Merchants are readable by any authenticated account.
    Only staff may create or change them.
    """

    def has_permission(self, request, view):
        if not request.user or not request.user.is_authenticated:
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return request.user.is_staff
