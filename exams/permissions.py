from rest_framework import permissions

from .models.user_profile import UserProfile


class HasExamRole(permissions.BasePermission):
    """Authenticated user whose profile is a teacher or a student."""
    message = "Your account has no exam role."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated or not hasattr(user, 'profile'):
            return False
        return user.profile.role in UserProfile.Role.values
