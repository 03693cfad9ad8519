"""
Domain exceptions for appointments app.

Each exception subclasses one of the shared error kinds in
``apps.core.exceptions`` so callers can rely on a stable ``kind``.

Exception Hierarchy:
    AppointmentsServiceError (base)
    ├── AppointmentNotFoundError         (not_found)
    ├── ProviderNotFoundError            (not_found)
    ├── ServiceNotFoundError             (not_found)
    ├── ClientNotFoundError              (not_found)
    ├── InvalidClientError               (bad_request)
    ├── InvalidScheduleError             (bad_request)
    ├── InvalidStatusError               (bad_request)
    ├── SlotUnavailableError             (scheduling_conflict)
    ├── InvalidStatusTransitionError     (invalid_transition)
    └── UnauthorizedAppointmentActionError (forbidden)
"""

from apps.core.exceptions import (
    DomainError,
    NotFoundError,
    BadRequestError,
    SchedulingConflictError,
    InvalidTransitionError,
    ForbiddenError,
)


class AppointmentsServiceError(DomainError):
    """Base exception for all appointments service errors."""
    pass


class AppointmentNotFoundError(AppointmentsServiceError, NotFoundError):
    """Appointment does not exist."""
    default_message = 'Appointment not found'


class ProviderNotFoundError(AppointmentsServiceError, NotFoundError):
    """Provider does not exist or is inactive."""
    default_message = 'Provider not found or inactive'


class ServiceNotFoundError(AppointmentsServiceError, NotFoundError):
    """Service does not exist, is inactive, or belongs to another provider."""
    default_message = 'Service not found for this provider'


class ClientNotFoundError(AppointmentsServiceError, NotFoundError):
    """Client account does not exist or is inactive."""
    default_message = 'Client not found'


class InvalidClientError(AppointmentsServiceError, BadRequestError):
    """Booked user is not a client account."""
    default_message = 'Appointments can only be booked for client accounts'


class InvalidScheduleError(AppointmentsServiceError, BadRequestError):
    """Date/time malformed, in the past, or beyond the booking horizon."""
    default_message = 'Invalid appointment date or time'


class InvalidStatusError(AppointmentsServiceError, BadRequestError):
    """Unknown status value."""
    default_message = 'Unknown appointment status'


class SlotUnavailableError(AppointmentsServiceError, SchedulingConflictError):
    """Provider already has an active appointment in this slot."""
    default_message = 'The provider already has an appointment at this time'


class InvalidStatusTransitionError(AppointmentsServiceError, InvalidTransitionError):
    """Status change not allowed from the current status."""
    pass


class UnauthorizedAppointmentActionError(AppointmentsServiceError, ForbiddenError):
    """Actor may not perform this action on the appointment."""
    pass
