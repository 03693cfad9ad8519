"""Review management service - review gate and CRUD operations for reviews."""

import logging
from django.db import transaction, IntegrityError
from django.db.models import QuerySet
from uuid import UUID
from typing import Optional

from apps.accounts.models import User
from apps.appointments.models import Appointment, AppointmentStatus
from apps.reviews.models import Review
from .exceptions import (
    ReviewNotFoundError,
    AppointmentNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    AppointmentNotReviewableError,
    UnauthorizedReviewActionError,
    ReviewEditWindowExpiredError,
)


logger = logging.getLogger(__name__)


def _validate_rating(rating) -> None:
    # bool is an int subclass; True must not pass as 1
    if isinstance(rating, bool) or not isinstance(rating, int) or not (1 <= rating <= 5):
        raise InvalidRatingError("Rating must be an integer between 1 and 5")


def can_review(*, appointment_id: UUID, client_id: UUID) -> bool:
    """
    Check whether a client may review an appointment.

    True only if the appointment exists, belongs to the client, is
    COMPLETED and has no review yet.

    Args:
        appointment_id: UUID of appointment
        client_id: UUID of client

    Returns:
        True if a review can be created
    """
    return (
        Appointment.objects
        .filter(
            id=appointment_id,
            client_id=client_id,
            status=AppointmentStatus.COMPLETED,
        )
        .filter(review__isnull=True)
        .exists()
    )


@transaction.atomic
def create_review(
    *,
    appointment_id: UUID,
    client: User,
    provider_id: Optional[UUID] = None,
    rating: int,
    comment: str = ''
) -> Review:
    """
    Create the review of a completed appointment.

    This operation:
    1. Validates rating (integer in 1-5, never clamped)
    2. Validates the appointment exists and belongs to the client
    3. Validates provider matches the appointment, when given
    4. Checks for an existing review (one per appointment)
    5. Checks the appointment is COMPLETED
    6. Creates the review; the unique appointment constraint rejects a
       racing duplicate that passed step 4

    Args:
        appointment_id: UUID of appointment being reviewed
        client: User writing the review (must be the appointment's client)
        provider_id: UUID of reviewed provider; defaults to the appointment's
        rating: Rating (1-5, required)
        comment: Written comment

    Returns:
        Created Review instance

    Raises:
        InvalidRatingError: If rating is not an integer in 1-5
        AppointmentNotFoundError: If appointment doesn't exist
        UnauthorizedReviewActionError: If client did not book the appointment
        AppointmentNotReviewableError: If provider mismatches or not completed
        DuplicateReviewError: If appointment already has a review
    """
    _validate_rating(rating)

    try:
        appointment = Appointment.objects.select_related('provider').get(id=appointment_id)
    except Appointment.DoesNotExist:
        raise AppointmentNotFoundError()

    if appointment.client_id != client.id:
        raise UnauthorizedReviewActionError(
            "You can only review your own appointments"
        )

    if provider_id and appointment.provider_id != provider_id:
        raise AppointmentNotReviewableError(
            "Provider does not match the appointment"
        )

    if Review.objects.filter(appointment=appointment).exists():
        raise DuplicateReviewError()

    if appointment.status != AppointmentStatus.COMPLETED:
        raise AppointmentNotReviewableError()

    try:
        with transaction.atomic():
            review = Review.objects.create(
                appointment=appointment,
                client=client,
                provider=appointment.provider,
                rating=rating,
                comment=comment,
            )
    except IntegrityError:
        # Database unique constraint caught duplicate
        logger.warning("Duplicate review rejected at commit for appointment %s", appointment.id)
        raise DuplicateReviewError()

    logger.info("Review %s created for appointment %s", review.id, appointment.id)
    return review


def get_review_by_id(*, review_id: UUID) -> Review:
    """
    Retrieve a review by ID.

    Args:
        review_id: UUID of review

    Returns:
        Review instance with related data

    Raises:
        ReviewNotFoundError: If review doesn't exist
    """
    try:
        review = Review.objects.select_related(
            'client',
            'provider',
            'appointment'
        ).get(id=review_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError()

    return review


def get_review_for_appointment(*, appointment_id: UUID) -> Review:
    """
    Retrieve the review attached to an appointment.

    Raises:
        ReviewNotFoundError: If the appointment has no review
    """
    try:
        return Review.objects.select_related('client', 'provider').get(appointment_id=appointment_id)
    except Review.DoesNotExist:
        raise ReviewNotFoundError("This appointment has no review")


@transaction.atomic
def update_review(
    *,
    review_id: UUID,
    user: User,
    rating: Optional[int] = None,
    comment: Optional[str] = None
) -> Review:
    """
    Update an existing review.

    Only the review author can update their review, and only within the
    edit window after creation. Appointment, client and provider cannot
    be changed.

    Args:
        review_id: UUID of review to update
        user: User making the update (must be author)
        rating: New rating (1-5)
        comment: New comment

    Returns:
        Updated Review instance

    Raises:
        ReviewNotFoundError: If review doesn't exist
        UnauthorizedReviewActionError: If user is not the author
        ReviewEditWindowExpiredError: If the edit window has closed
        InvalidRatingError: If rating is not an integer in 1-5
    """
    # Get review with row lock
    try:
        review = (
            Review.objects
            .select_for_update()
            .get(id=review_id)
        )
    except Review.DoesNotExist:
        raise ReviewNotFoundError()

    if review.client_id != user.id:
        raise UnauthorizedReviewActionError(
            "You can only update your own reviews"
        )

    if not review.can_be_edited():
        raise ReviewEditWindowExpiredError()

    if rating is not None:
        _validate_rating(rating)
        review.rating = rating
    if comment is not None:
        review.comment = comment

    review.save()

    logger.info("Review %s updated", review.id)
    return review


@transaction.atomic
def delete_review(*, review_id: UUID, user: User) -> None:
    """
    Delete a review.

    The author or an admin can delete a review. Deleting frees the
    appointment for a new review.

    Args:
        review_id: UUID of review to delete
        user: User making the deletion

    Raises:
        ReviewNotFoundError: If review doesn't exist
        UnauthorizedReviewActionError: If user is neither author nor admin
    """
    # Get review with row lock
    try:
        review = (
            Review.objects
            .select_for_update()
            .get(id=review_id)
        )
    except Review.DoesNotExist:
        raise ReviewNotFoundError()

    if review.client_id != user.id and not user.is_admin:
        raise UnauthorizedReviewActionError(
            "You can only delete your own reviews"
        )

    review_pk = review.id
    review.delete()
    logger.info("Review %s deleted by %s", review_pk, user.id)


def list_reviews(
    *,
    provider_id: Optional[UUID] = None,
    client_id: Optional[UUID] = None,
    rating: Optional[int] = None,
    min_rating: Optional[int] = None
) -> QuerySet[Review]:
    """
    List reviews with optional filters, newest first.

    Args:
        provider_id: Filter by reviewed provider
        client_id: Filter by author
        rating: Filter by exact rating
        min_rating: Filter by minimum rating

    Returns:
        QuerySet of Review instances
    """
    queryset = Review.objects.select_related('client', 'provider', 'appointment')

    if provider_id:
        queryset = queryset.filter(provider_id=provider_id)

    if client_id:
        queryset = queryset.filter(client_id=client_id)

    if rating:
        queryset = queryset.filter(rating=rating)

    if min_rating:
        queryset = queryset.filter(rating__gte=min_rating)

    return queryset.order_by('-created_at')
