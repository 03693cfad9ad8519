"""Statistics service - Appointment counts and completion figures."""

from django.db.models import Count, Avg
from uuid import UUID
from typing import Optional

from apps.appointments.models import Appointment, AppointmentStatus
from apps.reviews.models import Review
from .exceptions import InvalidScheduleError


def get_appointment_statistics(
    *,
    provider_id: Optional[UUID] = None,
    client_id: Optional[UUID] = None,
    date_from=None,
    date_to=None
) -> dict:
    """
    Summarize appointments, optionally scoped to a provider or client.

    This operation:
    1. Filters appointments by provider, client and scheduled date range
    2. Counts appointments per status (every status present, zeros included)
    3. Computes completion rate over non-cancelled appointments
    4. Averages ratings of reviews left on the matched appointments

    Args:
        provider_id: Optional provider filter
        client_id: Optional client filter
        date_from: Inclusive lower bound on scheduled date
        date_to: Inclusive upper bound on scheduled date

    Returns:
        Dictionary with:
        - total: int - Number of matched appointments
        - by_status: dict - Count per status value
        - completion_rate: float - Percent of non-cancelled appointments completed
        - average_rating: float or None - None when no reviews exist

    Raises:
        InvalidScheduleError: If date_from is after date_to

    Example:
        >>> stats = get_appointment_statistics(provider_id=provider.id)
        >>> stats['by_status']['completed']
        12
    """
    if date_from and date_to and date_from > date_to:
        raise InvalidScheduleError("date_from must not be after date_to")

    queryset = Appointment.objects.all()

    if provider_id:
        queryset = queryset.filter(provider_id=provider_id)

    if client_id:
        queryset = queryset.filter(client_id=client_id)

    if date_from:
        queryset = queryset.filter(scheduled_date__gte=date_from)

    if date_to:
        queryset = queryset.filter(scheduled_date__lte=date_to)

    by_status = {value: 0 for value in AppointmentStatus.values}
    for row in queryset.values('status').annotate(count=Count('id')).order_by('status'):
        by_status[row['status']] = row['count']

    total = sum(by_status.values())
    countable = total - by_status[AppointmentStatus.CANCELLED.value]
    completed = by_status[AppointmentStatus.COMPLETED.value]
    completion_rate = round(completed * 100 / countable, 2) if countable else 0.0

    average = Review.objects.filter(appointment__in=queryset).aggregate(avg=Avg('rating'))['avg']

    return {
        'total': total,
        'by_status': by_status,
        'completion_rate': completion_rate,
        'average_rating': round(float(average), 2) if average is not None else None,
    }
