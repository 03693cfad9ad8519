import pytest
from rest_framework import status
from rest_framework.exceptions import NotAuthenticated

from apps.core.exceptions import (
    DomainError,
    NotFoundError,
    BadRequestError,
    SchedulingConflictError,
    InvalidTransitionError,
    ForbiddenError,
    ExpiredError,
)
from apps.appointments.services.exceptions import SlotUnavailableError, InvalidStatusTransitionError
from apps.reviews.services.exceptions import ReviewEditWindowExpiredError, DuplicateReviewError
from config.views import api_exception_handler


class TestDomainErrors:
    """Kinds and messages carried by domain errors"""

    def test_default_message(self):
        error = NotFoundError()

        assert error.kind == 'not_found'
        assert error.message == 'Not found'
        assert str(error) == 'Not found'

    def test_custom_message(self):
        error = BadRequestError('Missing field')

        assert error.message == 'Missing field'

    def test_app_errors_inherit_kind(self):
        assert SlotUnavailableError().kind == 'scheduling_conflict'
        assert InvalidStatusTransitionError().kind == 'invalid_transition'
        assert ReviewEditWindowExpiredError().kind == 'expired'
        assert DuplicateReviewError().kind == 'bad_request'
        assert isinstance(DuplicateReviewError(), DomainError)


class TestExceptionHandler:
    """Transport mapping of error kinds"""

    @pytest.mark.parametrize('error, expected', [
        (NotFoundError(), status.HTTP_404_NOT_FOUND),
        (BadRequestError(), status.HTTP_400_BAD_REQUEST),
        (ForbiddenError(), status.HTTP_403_FORBIDDEN),
        (SchedulingConflictError(), status.HTTP_409_CONFLICT),
        (InvalidTransitionError(), status.HTTP_409_CONFLICT),
        (ExpiredError(), status.HTTP_403_FORBIDDEN),
    ])
    def test_status_codes(self, error, expected):
        response = api_exception_handler(error, {})

        assert response.status_code == expected
        assert response.data == {'error': error.message, 'kind': error.kind}

    def test_drf_errors_fall_through(self):
        response = api_exception_handler(NotAuthenticated(), {})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unknown_errors_not_handled(self):
        assert api_exception_handler(ValueError('boom'), {}) is None
