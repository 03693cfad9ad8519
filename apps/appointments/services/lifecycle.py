"""Appointment lifecycle service - booking, status transitions, rescheduling, queries."""

import logging
from datetime import date, datetime, time, timedelta
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.appointments.models import (
    Appointment,
    AppointmentStatus,
    OPEN_STATUSES,
)
from apps.providers.models import Provider, OfferedService
from .availability import is_slot_available
from .exceptions import (
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


logger = logging.getLogger(__name__)


def _validate_schedule(scheduled_date, scheduled_time) -> None:
    """Reject malformed, past, or too-distant slots."""
    if not isinstance(scheduled_date, date) or isinstance(scheduled_date, datetime):
        raise InvalidScheduleError("Scheduled date must be a calendar date")
    if not isinstance(scheduled_time, time):
        raise InvalidScheduleError("Scheduled time must be a time of day")
    if scheduled_time.second or scheduled_time.microsecond:
        raise InvalidScheduleError("Scheduled time must have minute resolution")

    start = timezone.make_aware(datetime.combine(scheduled_date, scheduled_time.replace(tzinfo=None)))
    now = timezone.now()
    if start <= now:
        raise InvalidScheduleError("Cannot book an appointment in the past")

    horizon_days = settings.SCHEDULING['BOOKING_HORIZON_DAYS']
    if scheduled_date > timezone.localdate() + timedelta(days=horizon_days):
        raise InvalidScheduleError(
            f"Cannot book more than {horizon_days} days in advance"
        )


@transaction.atomic
def create_appointment(
    *,
    client_id: UUID,
    provider_id: UUID,
    service_id: UUID,
    scheduled_date: date,
    scheduled_time: time,
    location: str = '',
    notes: str = ''
) -> Appointment:
    """
    Book a provider's slot for a client.

    This operation:
    1. Validates date/time (well-formed, minute resolution, not past, within horizon)
    2. Validates client, provider and the provider's service
    3. Checks availability over the service duration (advisory)
    4. Inserts a PENDING appointment; the unique slot constraint
       rejects a racing booking that passed the same pre-check

    Args:
        client_id: UUID of client user
        provider_id: UUID of provider
        service_id: UUID of the provider's offered service
        scheduled_date: Appointment day
        scheduled_time: Appointment start time
        location: Optional location
        notes: Optional notes

    Returns:
        Created Appointment instance

    Raises:
        InvalidScheduleError: If date/time malformed, in the past or too far ahead
        ClientNotFoundError: If client doesn't exist or is inactive
        InvalidClientError: If the user booked for is not a client account
        ProviderNotFoundError: If provider doesn't exist or is inactive
        ServiceNotFoundError: If service doesn't belong to provider or is inactive
        SlotUnavailableError: If the slot is taken (pre-check or commit time)
    """
    _validate_schedule(scheduled_date, scheduled_time)

    try:
        client = User.objects.get(id=client_id, is_active=True)
    except User.DoesNotExist:
        raise ClientNotFoundError()

    if not client.is_client:
        raise InvalidClientError()

    try:
        provider = Provider.objects.get(id=provider_id, is_active=True)
    except Provider.DoesNotExist:
        raise ProviderNotFoundError()

    try:
        service = OfferedService.objects.get(id=service_id, provider=provider, is_active=True)
    except OfferedService.DoesNotExist:
        raise ServiceNotFoundError()

    if not is_slot_available(
        provider_id=provider.id,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
        duration_minutes=service.duration_minutes,
    ):
        raise SlotUnavailableError()

    try:
        with transaction.atomic():
            appointment = Appointment.objects.create(
                client_id=client_id,
                provider=provider,
                service=service,
                scheduled_date=scheduled_date,
                scheduled_time=scheduled_time,
                status=AppointmentStatus.PENDING,
                location=location,
                notes=notes,
            )
    except IntegrityError:
        # Another booking committed the same slot after our pre-check
        logger.warning(
            "Slot conflict at commit for provider %s on %s %s",
            provider.id, scheduled_date, scheduled_time
        )
        raise SlotUnavailableError()

    logger.info("Appointment %s created for provider %s", appointment.id, provider.id)
    return appointment


def get_appointment_by_id(*, appointment_id: UUID) -> Appointment:
    """
    Retrieve an appointment by ID.

    Raises:
        AppointmentNotFoundError: If appointment doesn't exist
    """
    try:
        return Appointment.objects.select_related(
            'client',
            'provider',
            'service'
        ).get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise AppointmentNotFoundError()


def _check_transition_permission(appointment: Appointment, target_status: str, actor: User) -> None:
    if actor.is_admin:
        return

    if actor.is_provider_side and appointment.provider.is_operated_by(actor):
        return

    if actor.is_client and appointment.client_id == actor.id:
        if target_status == AppointmentStatus.CANCELLED:
            return
        raise UnauthorizedAppointmentActionError(
            "Clients can only cancel their own appointments"
        )

    raise UnauthorizedAppointmentActionError(
        "You do not have permission to change this appointment"
    )


def transition_appointment(
    *,
    appointment_id: UUID,
    target_status: str,
    actor: User
) -> Appointment:
    """
    Move an appointment to a new status.

    Legal moves: PENDING -> ACCEPTED | CANCELLED, ACCEPTED -> COMPLETED | CANCELLED.
    Provider-side actors operating the appointment's provider may make any
    legal move; the client may only cancel; admins may make any legal move.

    The write is a compare-and-set on the status that was read, so a
    concurrent transition makes this one fail instead of overwriting it.

    Args:
        appointment_id: UUID of appointment
        target_status: Desired status value
        actor: Authenticated user requesting the change

    Returns:
        Updated Appointment instance

    Raises:
        InvalidStatusError: If target_status is not a known status
        AppointmentNotFoundError: If appointment doesn't exist
        InvalidStatusTransitionError: If the move is illegal or lost a race
        UnauthorizedAppointmentActionError: If actor may not make the move
    """
    if target_status not in AppointmentStatus.values:
        raise InvalidStatusError(f"Unknown status: {target_status}")
    target_status = str(target_status)

    appointment = get_appointment_by_id(appointment_id=appointment_id)
    current_status = str(appointment.status)

    if not appointment.can_transition_to(target_status):
        raise InvalidStatusTransitionError(
            f"Cannot change status from {current_status} to {target_status}"
        )

    _check_transition_permission(appointment, target_status, actor)

    updated = Appointment.objects.filter(
        id=appointment.id,
        status=current_status,
    ).update(status=target_status, updated_at=timezone.now())

    if not updated:
        raise InvalidStatusTransitionError(
            f"Appointment is no longer {current_status}; it was changed concurrently"
        )

    appointment.refresh_from_db()
    logger.info(
        "Appointment %s moved %s -> %s by %s",
        appointment.id, current_status, target_status, actor.id
    )
    return appointment


def accept_appointment(*, appointment_id: UUID, actor: User) -> Appointment:
    return transition_appointment(
        appointment_id=appointment_id,
        target_status=AppointmentStatus.ACCEPTED,
        actor=actor,
    )


def complete_appointment(*, appointment_id: UUID, actor: User) -> Appointment:
    return transition_appointment(
        appointment_id=appointment_id,
        target_status=AppointmentStatus.COMPLETED,
        actor=actor,
    )


def cancel_appointment(*, appointment_id: UUID, actor: User) -> Appointment:
    return transition_appointment(
        appointment_id=appointment_id,
        target_status=AppointmentStatus.CANCELLED,
        actor=actor,
    )


def _check_participant(appointment: Appointment, actor: Optional[User], action: str) -> None:
    if actor is None or actor.is_admin or appointment.is_participant(actor):
        return
    raise UnauthorizedAppointmentActionError(
        f"You can only {action} appointments you take part in"
    )


@transaction.atomic
def reschedule_appointment(
    *,
    appointment_id: UUID,
    scheduled_date: date,
    scheduled_time: time,
    actor: Optional[User] = None
) -> Appointment:
    """
    Move an open appointment to a new date/time.

    Only PENDING and ACCEPTED appointments can be rescheduled. The
    appointment's own current slot is ignored by the availability check.

    Args:
        appointment_id: UUID of appointment
        scheduled_date: New day
        scheduled_time: New start time
        actor: Requesting user; when given, must be a participant or admin

    Returns:
        Updated Appointment instance

    Raises:
        AppointmentNotFoundError: If appointment doesn't exist
        InvalidStatusTransitionError: If appointment is completed or cancelled
        UnauthorizedAppointmentActionError: If actor is not a participant
        InvalidScheduleError: If new date/time is invalid
        SlotUnavailableError: If the new slot is taken
    """
    appointment = get_appointment_by_id(appointment_id=appointment_id)

    if appointment.status not in OPEN_STATUSES:
        raise InvalidStatusTransitionError(
            f"Cannot reschedule a {appointment.status} appointment"
        )

    _check_participant(appointment, actor, 'reschedule')
    _validate_schedule(scheduled_date, scheduled_time)

    if not is_slot_available(
        provider_id=appointment.provider_id,
        scheduled_date=scheduled_date,
        scheduled_time=scheduled_time,
        duration_minutes=appointment.service.duration_minutes,
        exclude_appointment_id=appointment.id,
    ):
        raise SlotUnavailableError()

    try:
        with transaction.atomic():
            updated = Appointment.objects.filter(
                id=appointment.id,
                status__in=OPEN_STATUSES,
            ).update(
                scheduled_date=scheduled_date,
                scheduled_time=scheduled_time,
                updated_at=timezone.now(),
            )
    except IntegrityError:
        logger.warning(
            "Slot conflict at commit rescheduling appointment %s to %s %s",
            appointment.id, scheduled_date, scheduled_time
        )
        raise SlotUnavailableError()

    if not updated:
        raise InvalidStatusTransitionError(
            "Appointment was closed concurrently and can no longer be rescheduled"
        )

    appointment.refresh_from_db()
    logger.info("Appointment %s rescheduled to %s %s", appointment.id, scheduled_date, scheduled_time)
    return appointment


@transaction.atomic
def update_appointment_details(
    *,
    appointment_id: UUID,
    actor: Optional[User] = None,
    location: Optional[str] = None,
    notes: Optional[str] = None
) -> Appointment:
    """
    Update location and/or notes of an open appointment.

    Raises:
        AppointmentNotFoundError: If appointment doesn't exist
        InvalidStatusTransitionError: If appointment is completed or cancelled
        UnauthorizedAppointmentActionError: If actor is not a participant
    """
    try:
        appointment = (
            Appointment.objects
            .select_for_update()
            .select_related('provider')
            .get(id=appointment_id)
        )
    except Appointment.DoesNotExist:
        raise AppointmentNotFoundError()

    if appointment.status not in OPEN_STATUSES:
        raise InvalidStatusTransitionError(
            f"Cannot edit a {appointment.status} appointment"
        )

    _check_participant(appointment, actor, 'edit')

    update_fields = ['updated_at']
    if location is not None:
        appointment.location = location
        update_fields.append('location')
    if notes is not None:
        appointment.notes = notes
        update_fields.append('notes')

    appointment.save(update_fields=update_fields)
    return appointment


def list_appointments(
    *,
    client_id: Optional[UUID] = None,
    provider_id: Optional[UUID] = None,
    status: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None
) -> QuerySet[Appointment]:
    """
    List appointments with optional filters, soonest first.

    Args:
        client_id: Filter by client
        provider_id: Filter by provider
        status: Filter by status
        date_from: Inclusive lower bound on scheduled date
        date_to: Inclusive upper bound on scheduled date

    Returns:
        QuerySet of Appointment instances

    Raises:
        InvalidStatusError: If status is not a known status
        InvalidScheduleError: If date_from is after date_to
    """
    if status and status not in AppointmentStatus.values:
        raise InvalidStatusError(f"Unknown status: {status}")
    if date_from and date_to and date_from > date_to:
        raise InvalidScheduleError("date_from must not be after date_to")

    queryset = Appointment.objects.select_related('client', 'provider', 'service')

    if client_id:
        queryset = queryset.filter(client_id=client_id)

    if provider_id:
        queryset = queryset.filter(provider_id=provider_id)

    if status:
        queryset = queryset.filter(status=status)

    if date_from:
        queryset = queryset.filter(scheduled_date__gte=date_from)

    if date_to:
        queryset = queryset.filter(scheduled_date__lte=date_to)

    return queryset.order_by('scheduled_date', 'scheduled_time')


def get_client_appointments(*, client_id: UUID, **filters) -> QuerySet[Appointment]:
    return list_appointments(client_id=client_id, **filters)


def get_provider_appointments(*, provider_id: UUID, **filters) -> QuerySet[Appointment]:
    return list_appointments(provider_id=provider_id, **filters)
