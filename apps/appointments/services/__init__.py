"""
Appointments services - Business logic layer.

This package contains all business operations for the appointments app:
- Booking and status lifecycle
- Availability and free slot listing
- Statistics
"""

# Lifecycle
from .lifecycle import (
    create_appointment,
    get_appointment_by_id,
    transition_appointment,
    accept_appointment,
    complete_appointment,
    cancel_appointment,
    reschedule_appointment,
    update_appointment_details,
    list_appointments,
    get_client_appointments,
    get_provider_appointments,
)

# Availability
from .availability import (
    is_slot_available,
    get_free_slots,
    get_occupied_intervals,
    slot_end,
)

# Statistics
from .statistics import (
    get_appointment_statistics,
)

# Domain Exceptions
from .exceptions import (
    AppointmentsServiceError,
    AppointmentNotFoundError,
    ProviderNotFoundError,
    ServiceNotFoundError,
    ClientNotFoundError,
    InvalidClientError,
    InvalidScheduleError,
    InvalidStatusError,
    SlotUnavailableError,
    InvalidStatusTransitionError,
    UnauthorizedAppointmentActionError,
)

__all__ = [
    # Lifecycle Services
    'create_appointment',
    'get_appointment_by_id',
    'transition_appointment',
    'accept_appointment',
    'complete_appointment',
    'cancel_appointment',
    'reschedule_appointment',
    'update_appointment_details',
    'list_appointments',
    'get_client_appointments',
    'get_provider_appointments',
    # Availability Services
    'is_slot_available',
    'get_free_slots',
    'get_occupied_intervals',
    'slot_end',
    # Statistics Services
    'get_appointment_statistics',
    # Exceptions
    'AppointmentsServiceError',
    'AppointmentNotFoundError',
    'ProviderNotFoundError',
    'ServiceNotFoundError',
    'ClientNotFoundError',
    'InvalidClientError',
    'InvalidScheduleError',
    'InvalidStatusError',
    'SlotUnavailableError',
    'InvalidStatusTransitionError',
    'UnauthorizedAppointmentActionError',
]
