"""Domain exceptions for reviews app."""

from apps.core.exceptions import (
    DomainError,
    NotFoundError,
    BadRequestError,
    ForbiddenError,
    ExpiredError,
)


class ReviewsServiceError(DomainError):
    """Base exception for all reviews service errors."""
    pass


class ReviewNotFoundError(ReviewsServiceError, NotFoundError):
    """Review does not exist."""
    default_message = 'Review not found'


class AppointmentNotFoundError(ReviewsServiceError, NotFoundError):
    """Reviewed appointment does not exist."""
    default_message = 'Appointment not found'


class ProviderNotFoundError(ReviewsServiceError, NotFoundError):
    """Provider does not exist or is inactive."""
    default_message = 'Provider not found or inactive'


class DuplicateReviewError(ReviewsServiceError, BadRequestError):
    """Appointment already has a review."""
    default_message = 'This appointment has already been reviewed'


class InvalidRatingError(ReviewsServiceError, BadRequestError):
    """Rating must be an integer between 1 and 5."""
    default_message = 'Rating must be an integer between 1 and 5'


class AppointmentNotReviewableError(ReviewsServiceError, BadRequestError):
    """Appointment is not completed or does not match the given provider."""
    default_message = 'Only completed appointments can be reviewed'


class UnauthorizedReviewActionError(ReviewsServiceError, ForbiddenError):
    """User cannot create or modify this review."""
    pass


class ReviewEditWindowExpiredError(ReviewsServiceError, ExpiredError):
    """Review is older than the edit window."""
    default_message = 'Reviews can only be edited within 24 hours of creation'


class InvalidDateRangeError(ReviewsServiceError, BadRequestError):
    """date_from is after date_to."""
    default_message = 'date_from must not be after date_to'
