import pytest
from datetime import time
from django.core.exceptions import ValidationError
from apps.accounts.models import User, UserRole
from apps.providers.models import Provider, ProviderKind, WorkingHours, Weekday


@pytest.fixture
def provider_user(db):
    return User.objects.create_user(
        email='pro@example.com',
        password='TestPass123!',
        role=UserRole.PROFESSIONAL,
    )


@pytest.fixture
def provider(db, provider_user):
    return Provider.objects.create(
        user=provider_user,
        kind=ProviderKind.PROFESSIONAL,
        display_name='Physio',
    )


@pytest.mark.django_db
class TestWorkingWindows:
    """Tests for Provider.get_working_windows"""

    def test_windows_ordered_by_start(self, provider):
        WorkingHours.objects.create(
            provider=provider, weekday=Weekday.MONDAY, start_time=time(14, 0), end_time=time(18, 0)
        )
        WorkingHours.objects.create(
            provider=provider, weekday=Weekday.MONDAY, start_time=time(8, 0), end_time=time(12, 0)
        )

        assert provider.get_working_windows(Weekday.MONDAY) == [
            (time(8, 0), time(12, 0)),
            (time(14, 0), time(18, 0)),
        ]

    def test_closed_window_skipped(self, provider):
        WorkingHours.objects.create(
            provider=provider,
            weekday=Weekday.SUNDAY,
            is_open=False,
            start_time=time(9, 0),
            end_time=time(12, 0),
        )

        assert provider.get_working_windows(Weekday.SUNDAY) == []

    def test_no_hours_configured(self, provider):
        assert provider.get_working_windows(Weekday.TUESDAY) == []

    def test_weekday_matches_date_weekday(self):
        """Weekday values line up with date.weekday()."""
        assert Weekday.MONDAY == 0
        assert Weekday.SUNDAY == 6


@pytest.mark.django_db
class TestProviderModel:

    def test_end_before_start_invalid(self, provider):
        hours = WorkingHours(
            provider=provider,
            weekday=Weekday.FRIDAY,
            start_time=time(17, 0),
            end_time=time(9, 0),
        )

        with pytest.raises(ValidationError):
            hours.clean()

    def test_is_operated_by(self, provider, provider_user):
        other = User.objects.create_user(email='x@example.com', password='TestPass123!')

        assert provider.is_operated_by(provider_user)
        assert not provider.is_operated_by(other)
        assert not provider.is_operated_by(None)

    def test_str_with_company(self, provider):
        provider.company_name = 'Clinic Ltd'

        assert str(provider) == 'Physio (Clinic Ltd)'
