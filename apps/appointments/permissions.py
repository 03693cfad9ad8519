from rest_framework import permissions


class IsAppointmentParticipant(permissions.BasePermission):
    """
    Permission: Only the client, the provider operating the appointment,
    or an admin can see or modify it.
    """

    def has_object_permission(self, request, view, obj):
        if request.user.is_admin:
            return True
        return obj.is_participant(request.user)


class CanBookAppointments(permissions.BasePermission):
    """
    Permission: Clients (and admins booking on a client's behalf) may create.
    """

    message = 'Only clients can book appointments'

    def has_permission(self, request, view):
        if view.action != 'create':
            return True
        return request.user.is_client or request.user.is_admin
