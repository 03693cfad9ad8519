import pytest
from datetime import time, timedelta
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User, UserRole
from apps.providers.models import Provider, ProviderKind, WorkingHours, OfferedService
from apps.appointments.models import Appointment, AppointmentStatus


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
def client_user(db):
    """Create and return a client."""
    return User.objects.create_user(
        email='client@example.com',
        password='TestPass123!',
        display_name='First Client',
        role=UserRole.CLIENT,
    )


@pytest.fixture
def other_client_user(db):
    """Create and return a second client."""
    return User.objects.create_user(
        email='client2@example.com',
        password='TestPass123!',
        display_name='Second Client',
        role=UserRole.CLIENT,
    )


@pytest.fixture
def provider_user(db):
    """Create and return the user operating the provider."""
    return User.objects.create_user(
        email='pro@example.com',
        password='TestPass123!',
        display_name='Hair Pro',
        role=UserRole.PROFESSIONAL,
    )


@pytest.fixture
def other_provider_user(db):
    """Create and return a company employee operating another provider."""
    return User.objects.create_user(
        email='employee@example.com',
        password='TestPass123!',
        display_name='Salon Employee',
        role=UserRole.COMPANY_EMPLOYEE,
    )


@pytest.fixture
def admin_user(db):
    """Create and return an admin."""
    return User.objects.create_superuser(
        email='admin@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def provider(db, provider_user):
    """Provider open every day 09:00-17:00."""
    provider = Provider.objects.create(
        user=provider_user,
        kind=ProviderKind.PROFESSIONAL,
        display_name='Hair Pro',
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
def other_provider(db, other_provider_user):
    """Provider without any configured working hours."""
    return Provider.objects.create(
        user=other_provider_user,
        kind=ProviderKind.COMPANY_EMPLOYEE,
        display_name='Salon Employee',
        company_name='Salon Ltd',
    )


@pytest.fixture
def service(db, provider):
    """30 minute service offered by the provider."""
    return OfferedService.objects.create(
        provider=provider,
        name='Haircut',
        duration_minutes=30,
    )


@pytest.fixture
def long_service(db, provider):
    """60 minute service offered by the provider."""
    return OfferedService.objects.create(
        provider=provider,
        name='Colouring',
        duration_minutes=60,
    )


@pytest.fixture
def booking_date():
    """A date one week ahead, safely inside the booking horizon."""
    return timezone.localdate() + timedelta(days=7)


@pytest.fixture
def appointment(db, client_user, provider, service, booking_date):
    """Pending appointment at 14:00 one week ahead."""
    return Appointment.objects.create(
        client=client_user,
        provider=provider,
        service=service,
        scheduled_date=booking_date,
        scheduled_time=time(14, 0),
        status=AppointmentStatus.PENDING,
    )


@pytest.fixture
def client_auth_client(client_user):
    """Return API client authenticated as the first client."""
    return _authenticated_client(client_user)


@pytest.fixture
def other_client_auth_client(other_client_user):
    """Return API client authenticated as the second client."""
    return _authenticated_client(other_client_user)


@pytest.fixture
def provider_auth_client(provider_user):
    """Return API client authenticated as the provider's user."""
    return _authenticated_client(provider_user)


@pytest.fixture
def other_provider_auth_client(other_provider_user):
    """Return API client authenticated as another provider's user."""
    return _authenticated_client(other_provider_user)


@pytest.fixture
def admin_auth_client(admin_user):
    """Return API client authenticated as admin."""
    return _authenticated_client(admin_user)
