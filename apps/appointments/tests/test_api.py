import pytest
from datetime import time, timedelta
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from apps.appointments.models import Appointment, AppointmentStatus


# =============================================================================
# Booking Tests
# =============================================================================

@pytest.mark.django_db
class TestAppointmentCreate:
    """Tests for POST /api/appointments/"""

    def _payload(self, provider, service, booking_date, at='14:00'):
        return {
            'provider': str(provider.id),
            'service': str(service.id),
            'scheduled_date': booking_date.isoformat(),
            'scheduled_time': at,
            'location': 'Studio',
        }

    def test_create_appointment(self, client_auth_client, client_user, provider, service, booking_date):
        """Client books a slot for themself."""
        url = reverse('appointments:appointment-list')
        response = client_auth_client.post(url, self._payload(provider, service, booking_date), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == 'pending'
        assert str(response.data['client']['id']) == str(client_user.id)
        assert response.data['scheduled_end'].endswith('14:30:00+00:00')

    def test_create_requires_authentication(self, api_client, provider, service, booking_date):
        url = reverse('appointments:appointment-list')
        response = api_client.post(url, self._payload(provider, service, booking_date), format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_provider_cannot_book(self, provider_auth_client, provider, service, booking_date):
        """Only clients (or admins) book."""
        url = reverse('appointments:appointment-list')
        response = provider_auth_client.post(url, self._payload(provider, service, booking_date), format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_books_for_client(self, admin_auth_client, client_user, provider, service, booking_date):
        url = reverse('appointments:appointment-list')
        payload = self._payload(provider, service, booking_date)
        payload['client'] = str(client_user.id)
        response = admin_auth_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert Appointment.objects.get().client == client_user

    def test_admin_must_name_client(self, admin_auth_client, provider, service, booking_date):
        """An admin without a client would book for their own admin account."""
        url = reverse('appointments:appointment-list')
        response = admin_auth_client.post(url, self._payload(provider, service, booking_date), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'bad_request'
        assert not Appointment.objects.exists()

    def test_create_conflict_returns_409(
        self, client_auth_client, appointment, provider, service, booking_date
    ):
        """Occupied slot maps to 409 with a scheduling_conflict kind."""
        url = reverse('appointments:appointment-list')
        response = client_auth_client.post(url, self._payload(provider, service, booking_date), format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['kind'] == 'scheduling_conflict'

    def test_create_past_returns_400(self, client_auth_client, provider, service):
        url = reverse('appointments:appointment-list')
        yesterday = timezone.localdate() - timedelta(days=1)
        response = client_auth_client.post(url, self._payload(provider, service, yesterday), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['kind'] == 'bad_request'

    def test_create_unknown_provider_returns_404(self, client_auth_client, provider, service, booking_date):
        url = reverse('appointments:appointment-list')
        payload = self._payload(provider, service, booking_date)
        payload['provider'] = '00000000-0000-0000-0000-000000000000'
        response = client_auth_client.post(url, payload, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_missing_field(self, client_auth_client, provider, booking_date):
        url = reverse('appointments:appointment-list')
        response = client_auth_client.post(url, {
            'provider': str(provider.id),
            'scheduled_date': booking_date.isoformat(),
            'scheduled_time': '14:00',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'service' in response.data


# =============================================================================
# Listing & Detail Tests
# =============================================================================

@pytest.mark.django_db
class TestAppointmentList:
    """Tests for GET /api/appointments/"""

    def test_client_sees_own(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-list')
        response = client_auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['results']) == 1

    def test_provider_sees_own(self, provider_auth_client, appointment):
        url = reverse('appointments:appointment-list')
        response = provider_auth_client.get(url)

        assert len(response.data['results']) == 1

    def test_stranger_sees_nothing(self, other_client_auth_client, appointment):
        url = reverse('appointments:appointment-list')
        response = other_client_auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['results'] == []

    def test_admin_sees_all(self, admin_auth_client, appointment):
        url = reverse('appointments:appointment-list')
        response = admin_auth_client.get(url)

        assert len(response.data['results']) == 1

    def test_filter_by_status(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-list')

        response = client_auth_client.get(url, {'status': 'accepted'})
        assert response.data['results'] == []

        response = client_auth_client.get(url, {'status': 'pending'})
        assert len(response.data['results']) == 1

    def test_filter_invalid_status(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-list')
        response = client_auth_client.get(url, {'status': 'archived'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-detail', kwargs={'pk': appointment.id})
        response = client_auth_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['service']['duration_minutes'] == 30

    def test_retrieve_by_stranger_is_404(self, other_client_auth_client, appointment):
        url = reverse('appointments:appointment-detail', kwargs={'pk': appointment.id})
        response = other_client_auth_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_details(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-detail', kwargs={'pk': appointment.id})
        response = client_auth_client.patch(url, {'notes': 'Bring photos'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['notes'] == 'Bring photos'


# =============================================================================
# Lifecycle Action Tests
# =============================================================================

@pytest.mark.django_db
class TestAppointmentActions:
    """Tests for accept/complete/cancel/reschedule actions"""

    def test_accept_and_complete(self, provider_auth_client, appointment):
        accept_url = reverse('appointments:appointment-accept', kwargs={'pk': appointment.id})
        complete_url = reverse('appointments:appointment-complete', kwargs={'pk': appointment.id})

        response = provider_auth_client.post(accept_url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'accepted'

        response = provider_auth_client.post(complete_url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == 'completed'

    def test_client_accept_forbidden(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-accept', kwargs={'pk': appointment.id})
        response = client_auth_client.post(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'forbidden'

    def test_invalid_transition_returns_409(self, provider_auth_client, appointment):
        url = reverse('appointments:appointment-complete', kwargs={'pk': appointment.id})
        response = provider_auth_client.post(url)

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['kind'] == 'invalid_transition'

    def test_client_cancel(self, client_auth_client, appointment):
        url = reverse('appointments:appointment-cancel', kwargs={'pk': appointment.id})
        response = client_auth_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        appointment.refresh_from_db()
        assert appointment.status == AppointmentStatus.CANCELLED

    def test_reschedule(self, client_auth_client, appointment, booking_date):
        url = reverse('appointments:appointment-reschedule', kwargs={'pk': appointment.id})
        response = client_auth_client.post(url, {
            'scheduled_date': booking_date.isoformat(),
            'scheduled_time': '16:00',
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['scheduled_time'] == '16:00:00'


# =============================================================================
# Availability Tests
# =============================================================================

@pytest.mark.django_db
class TestAvailabilityEndpoints:
    """Tests for availability, free_slots and statistics"""

    def test_availability(self, client_auth_client, appointment, provider, booking_date):
        url = reverse('appointments:appointment-availability')
        response = client_auth_client.get(url, {
            'provider': str(provider.id),
            'date': booking_date.isoformat(),
            'time': '14:00',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['available'] is False

    def test_availability_with_service(self, client_auth_client, appointment, provider, long_service, booking_date):
        """A 60 minute service at 13:30 collides with 14:00."""
        url = reverse('appointments:appointment-availability')
        response = client_auth_client.get(url, {
            'provider': str(provider.id),
            'date': booking_date.isoformat(),
            'time': '13:30',
            'service': str(long_service.id),
        })

        assert response.data['available'] is False

    def test_free_slots(self, client_auth_client, appointment, provider, booking_date):
        url = reverse('appointments:appointment-free-slots')
        response = client_auth_client.get(url, {
            'provider': str(provider.id),
            'date': booking_date.isoformat(),
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['duration_minutes'] == 30
        starts = [slot['start'] for slot in response.data['slots']]
        assert '14:00:00' not in starts
        assert response.data['slots'][0] == {'start': '09:00:00', 'end': '09:30:00'}

    def test_free_slots_unknown_provider(self, client_auth_client, booking_date):
        url = reverse('appointments:appointment-free-slots')
        response = client_auth_client.get(url, {
            'provider': '00000000-0000-0000-0000-000000000000',
            'date': booking_date.isoformat(),
        })

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_free_slots_missing_params(self, client_auth_client):
        url = reverse('appointments:appointment-free-slots')
        response = client_auth_client.get(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_statistics(self, provider_auth_client, appointment, provider):
        url = reverse('appointments:appointment-statistics')
        response = provider_auth_client.get(url, {'provider': str(provider.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1
        assert response.data['by_status']['pending'] == 1
        assert response.data['average_rating'] is None

    def test_statistics_default_to_own_scope(
        self, client_auth_client, other_client_auth_client, provider_auth_client, appointment
    ):
        url = reverse('appointments:appointment-statistics')

        assert client_auth_client.get(url).data['total'] == 1
        assert provider_auth_client.get(url).data['total'] == 1
        assert other_client_auth_client.get(url).data['total'] == 0

    def test_statistics_of_other_client_forbidden(self, other_client_auth_client, client_user, appointment):
        url = reverse('appointments:appointment-statistics')
        response = other_client_auth_client.get(url, {'client': str(client_user.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['kind'] == 'forbidden'

    def test_statistics_of_other_provider_forbidden(self, other_provider_auth_client, provider, appointment):
        url = reverse('appointments:appointment-statistics')
        response = other_provider_auth_client.get(url, {'provider': str(provider.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_client_cannot_read_provider_statistics(self, client_auth_client, provider, appointment):
        url = reverse('appointments:appointment-statistics')
        response = client_auth_client.get(url, {'provider': str(provider.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_admin_reads_any_statistics(self, admin_auth_client, client_user, appointment):
        url = reverse('appointments:appointment-statistics')
        response = admin_auth_client.get(url, {'client': str(client_user.id)})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 1
