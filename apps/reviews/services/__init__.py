"""
Reviews services - Business logic layer.

This package contains all business operations for the reviews app:
- Review gate (eligibility) and CRUD operations
- Rating statistics and aggregation
"""

# Review Management
from .review_management import (
    can_review,
    create_review,
    get_review_by_id,
    get_review_for_appointment,
    update_review,
    delete_review,
    list_reviews,
)

# Statistics
from .statistics import (
    get_rating_statistics,
    get_average_rating,
    get_rating_distribution,
    get_provider_review_summary,
)

# Domain Exceptions
from .exceptions import (
    ReviewsServiceError,
    ReviewNotFoundError,
    AppointmentNotFoundError,
    ProviderNotFoundError,
    DuplicateReviewError,
    InvalidRatingError,
    AppointmentNotReviewableError,
    UnauthorizedReviewActionError,
    ReviewEditWindowExpiredError,
    InvalidDateRangeError,
)

__all__ = [
    # Review Management Services
    'can_review',
    'create_review',
    'get_review_by_id',
    'get_review_for_appointment',
    'update_review',
    'delete_review',
    'list_reviews',
    # Statistics Services
    'get_rating_statistics',
    'get_average_rating',
    'get_rating_distribution',
    'get_provider_review_summary',
    # Exceptions
    'ReviewsServiceError',
    'ReviewNotFoundError',
    'AppointmentNotFoundError',
    'ProviderNotFoundError',
    'DuplicateReviewError',
    'InvalidRatingError',
    'AppointmentNotReviewableError',
    'UnauthorizedReviewActionError',
    'ReviewEditWindowExpiredError',
    'InvalidDateRangeError',
]
