import pytest
from datetime import time, timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.providers.models import Provider, ProviderKind, WorkingHours, OfferedService
from apps.appointments.models import Appointment, AppointmentStatus
from apps.reviews.models import Review


def _authenticated_client(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def review_user(db):
    """Client who writes reviews."""
    return User.objects.create_user(
        email='reviewer@example.com',
        password='TestPass123!',
        display_name='Reviewer',
        role=UserRole.CLIENT,
    )


@pytest.fixture
def review_other_user(db):
    """Another client."""
    return User.objects.create_user(
        email='review_other@example.com',
        password='TestPass123!',
        display_name='Other Reviewer',
        role=UserRole.CLIENT,
    )


@pytest.fixture
def review_provider_user(db):
    return User.objects.create_user(
        email='review_pro@example.com',
        password='TestPass123!',
        display_name='Reviewed Pro',
        role=UserRole.PROFESSIONAL,
    )


@pytest.fixture
def review_admin(db):
    return User.objects.create_superuser(
        email='review_admin@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def review_provider(db, review_provider_user):
    """Provider open every day 09:00-17:00."""
    provider = Provider.objects.create(
        user=review_provider_user,
        kind=ProviderKind.PROFESSIONAL,
        display_name='Reviewed Pro',
    )
    for weekday in range(7):
        WorkingHours.objects.create(
            provider=provider,
            weekday=weekday,
            start_time=time(9, 0),
            end_time=time(17, 0),
        )
    return provider


@pytest.fixture
def review_service(db, review_provider):
    return OfferedService.objects.create(
        provider=review_provider,
        name='Consultation',
        duration_minutes=30,
    )


@pytest.fixture
def make_appointment(db, review_user, review_provider, review_service):
    """Factory for appointments of the reviewed provider at distinct slots."""
    slots = iter(range(9, 17))

    def _make(status=AppointmentStatus.COMPLETED, client=None):
        return Appointment.objects.create(
            client=client or review_user,
            provider=review_provider,
            service=review_service,
            scheduled_date=timezone.localdate() + timedelta(days=3),
            scheduled_time=time(next(slots), 0),
            status=status,
        )

    return _make


@pytest.fixture
def completed_appointment(make_appointment):
    return make_appointment()


@pytest.fixture
def pending_appointment(make_appointment):
    return make_appointment(status=AppointmentStatus.PENDING)


@pytest.fixture
def review(db, completed_appointment, review_user, review_provider):
    """Review of the completed appointment."""
    return Review.objects.create(
        appointment=completed_appointment,
        client=review_user,
        provider=review_provider,
        rating=4,
        comment='Very helpful',
    )


@pytest.fixture
def review_auth_client(review_user):
    """Return API client authenticated as review user."""
    return _authenticated_client(review_user)


@pytest.fixture
def review_other_client(review_other_user):
    """Return API client authenticated as other user."""
    return _authenticated_client(review_other_user)


@pytest.fixture
def review_admin_client(review_admin):
    return _authenticated_client(review_admin)
