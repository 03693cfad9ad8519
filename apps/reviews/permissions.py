from rest_framework import permissions


class IsReviewAuthorOrReadOnly(permissions.BasePermission):
    """
    Permission: Only review author can edit their review; the author or an
    admin can delete it. Any authenticated user can read reviews.
    """

    def has_object_permission(self, request, view, obj):
        # Read permissions are allowed for any request
        if request.method in permissions.SAFE_METHODS:
            return True

        if request.method == 'DELETE' and request.user.is_admin:
            return True

        # Write permissions only for review author
        return obj.client_id == request.user.id
