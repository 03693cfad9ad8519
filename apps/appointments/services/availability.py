"""Availability service - free/busy checks and free slot listing."""

from datetime import date, time
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.utils import timezone

from apps.appointments.models import Appointment, AppointmentStatus
from apps.providers.models import Provider
from .exceptions import ProviderNotFoundError, InvalidScheduleError


MINUTES_PER_DAY = 24 * 60


def default_slot_minutes() -> int:
    return settings.SCHEDULING['DEFAULT_SLOT_MINUTES']


def _to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def _from_minutes(minutes: int) -> time:
    return time(hour=minutes // 60, minute=minutes % 60)


def _validate_duration(duration_minutes: Optional[int]) -> None:
    if duration_minutes is None:
        return
    if isinstance(duration_minutes, bool) or not isinstance(duration_minutes, int) or duration_minutes <= 0:
        raise InvalidScheduleError("Duration must be a positive number of minutes")


def _get_provider(provider_id: UUID) -> Provider:
    try:
        return Provider.objects.get(id=provider_id, is_active=True)
    except Provider.DoesNotExist:
        raise ProviderNotFoundError()


def _active_appointments(
    *,
    provider_id: UUID,
    scheduled_date: date,
    exclude_appointment_id: Optional[UUID] = None
):
    queryset = (
        Appointment.objects
        .filter(provider_id=provider_id, scheduled_date=scheduled_date)
        .exclude(status=AppointmentStatus.CANCELLED)
    )
    if exclude_appointment_id:
        queryset = queryset.exclude(id=exclude_appointment_id)
    return queryset


def get_occupied_intervals(
    *,
    provider_id: UUID,
    scheduled_date: date,
    exclude_appointment_id: Optional[UUID] = None
) -> list[tuple[int, int]]:
    """
    Occupied [start, end) intervals for a provider's day, in minutes since midnight.

    Cancelled appointments never occupy their slot. Each interval spans the
    booked service's duration.
    """
    appointments = _active_appointments(
        provider_id=provider_id,
        scheduled_date=scheduled_date,
        exclude_appointment_id=exclude_appointment_id,
    ).select_related('service')

    intervals = []
    for appointment in appointments:
        start = _to_minutes(appointment.scheduled_time)
        duration = appointment.service.duration_minutes or default_slot_minutes()
        intervals.append((start, start + duration))

    return sorted(intervals)


def _overlaps(start: int, end: int, intervals: list[tuple[int, int]]) -> bool:
    return any(start < busy_end and busy_start < end for busy_start, busy_end in intervals)


def is_slot_available(
    *,
    provider_id: UUID,
    scheduled_date: date,
    scheduled_time: time,
    duration_minutes: Optional[int] = None,
    exclude_appointment_id: Optional[UUID] = None
) -> bool:
    """
    Check whether a provider is free at a given date/time.

    Without a duration only the exact slot is compared. With a duration,
    [time, time + duration) must not overlap any occupied interval.

    The answer is advisory: the unique slot constraint on the appointments
    table decides races at commit time.

    Args:
        provider_id: UUID of provider
        scheduled_date: Day to check
        scheduled_time: Candidate start time
        duration_minutes: Service duration, optional
        exclude_appointment_id: Appointment to ignore (rescheduling)

    Returns:
        True if the slot is free

    Raises:
        ProviderNotFoundError: If provider doesn't exist or is inactive
        InvalidScheduleError: If duration is not a positive integer
    """
    _get_provider(provider_id)
    _validate_duration(duration_minutes)

    if duration_minutes is None:
        return not _active_appointments(
            provider_id=provider_id,
            scheduled_date=scheduled_date,
            exclude_appointment_id=exclude_appointment_id,
        ).filter(scheduled_time=scheduled_time).exists()

    start = _to_minutes(scheduled_time)
    intervals = get_occupied_intervals(
        provider_id=provider_id,
        scheduled_date=scheduled_date,
        exclude_appointment_id=exclude_appointment_id,
    )
    return not _overlaps(start, start + duration_minutes, intervals)


def get_free_slots(
    *,
    provider_id: UUID,
    scheduled_date: date,
    duration_minutes: Optional[int] = None
) -> list[time]:
    """
    List bookable start times for a provider on a date.

    Candidates are laid on a grid of DEFAULT_SLOT_MINUTES inside each of the
    provider's working windows for that weekday. A candidate is kept when the
    whole [start, start + duration) fits the window and overlaps no occupied
    interval. Start times already in the past are dropped.

    Computed fresh on every call.

    Args:
        provider_id: UUID of provider
        scheduled_date: Day to list
        duration_minutes: Service duration; defaults to the slot length

    Returns:
        Ordered list of start times; empty when the provider is closed,
        has no configured hours, or is fully booked

    Raises:
        ProviderNotFoundError: If provider doesn't exist or is inactive
        InvalidScheduleError: If duration is not a positive integer
    """
    provider = _get_provider(provider_id)
    _validate_duration(duration_minutes)

    step = default_slot_minutes()
    duration = duration_minutes or step

    now = timezone.localtime()
    if scheduled_date < now.date():
        return []
    earliest = _to_minutes(now.time()) + 1 if scheduled_date == now.date() else 0

    windows = provider.get_working_windows(scheduled_date.weekday())
    if not windows:
        return []

    intervals = get_occupied_intervals(provider_id=provider.id, scheduled_date=scheduled_date)

    slots = []
    for window_start, window_end in windows:
        start = _to_minutes(window_start)
        end = _to_minutes(window_end)
        candidate = start
        while candidate + duration <= end:
            if candidate >= earliest and not _overlaps(candidate, candidate + duration, intervals):
                slots.append(candidate)
            candidate += step

    return [_from_minutes(minutes) for minutes in sorted(set(slots)) if minutes < MINUTES_PER_DAY]


def slot_end(scheduled_time: time, duration_minutes: int) -> time:
    """End time of a slot; clamps at midnight."""
    minutes = min(_to_minutes(scheduled_time) + duration_minutes, MINUTES_PER_DAY - 1)
    return _from_minutes(minutes)
