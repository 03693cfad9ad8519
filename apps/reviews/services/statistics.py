"""Statistics service - Rating aggregation over reviews."""

from django.db.models import Count, Avg
from uuid import UUID
from typing import Optional

from apps.providers.models import Provider
from apps.reviews.models import Review
from .exceptions import ProviderNotFoundError, InvalidDateRangeError


def _empty_distribution() -> dict:
    return {star: 0 for star in range(1, 6)}


def get_rating_statistics(
    *,
    provider_id: Optional[UUID] = None,
    client_id: Optional[UUID] = None,
    date_from=None,
    date_to=None
) -> dict:
    """
    Aggregate ratings over a filtered set of reviews.

    Computed from the review table on every call, so a committed review
    is reflected by the next call.

    This operation:
    1. Filters reviews by optional provider, client and creation date range
    2. Calculates total count and average rating
    3. Generates rating distribution (1-5 stars, zeros included)

    Args:
        provider_id: Optional UUID to filter by reviewed provider
        client_id: Optional UUID to filter by author
        date_from: Inclusive lower bound on review creation date
        date_to: Inclusive upper bound on review creation date

    Returns:
        Dictionary with statistics:
        - total: int - Total number of reviews
        - average_rating: float - Average rating (rounded to 2 decimals, 0 when empty)
        - rating_distribution: dict - Count for each rating 1-5

    Example:
        >>> stats = get_rating_statistics(provider_id=provider.id)
        >>> stats['rating_distribution']
        {1: 1, 2: 0, 3: 1, 4: 1, 5: 2}

    Raises:
        InvalidDateRangeError: If date_from is after date_to
    """
    if date_from and date_to and date_from > date_to:
        raise InvalidDateRangeError()

    queryset = Review.objects.all()

    if provider_id:
        queryset = queryset.filter(provider_id=provider_id)

    if client_id:
        queryset = queryset.filter(client_id=client_id)

    if date_from:
        queryset = queryset.filter(created_at__date__gte=date_from)

    if date_to:
        queryset = queryset.filter(created_at__date__lte=date_to)

    aggregate = queryset.aggregate(total=Count('id'), avg=Avg('rating'))

    distribution = _empty_distribution()
    for row in queryset.values('rating').annotate(count=Count('id')).order_by('rating'):
        distribution[row['rating']] = row['count']

    return {
        'total': aggregate['total'],
        'average_rating': round(float(aggregate['avg'] or 0), 2),
        'rating_distribution': distribution,
    }


def get_average_rating(*, provider_id: UUID) -> float:
    return get_rating_statistics(provider_id=provider_id)['average_rating']


def get_rating_distribution(*, provider_id: UUID) -> dict:
    return get_rating_statistics(provider_id=provider_id)['rating_distribution']


def get_provider_review_summary(*, provider_id: UUID) -> dict:
    """
    Get review summary for a specific provider.

    Useful for provider profile pages.

    Args:
        provider_id: UUID of provider

    Returns:
        Dictionary with:
        - provider_id: str - UUID as string
        - provider_name: str - Display name
        - total: int - Total number of reviews
        - average_rating: float - Average rating
        - rating_distribution: dict - Count for each rating 1-5

    Raises:
        ProviderNotFoundError: If provider doesn't exist or is inactive
    """
    try:
        provider = Provider.objects.get(id=provider_id, is_active=True)
    except Provider.DoesNotExist:
        raise ProviderNotFoundError()

    stats = get_rating_statistics(provider_id=provider.id)

    return {
        'provider_id': str(provider.id),
        'provider_name': str(provider),
        **stats,
    }
