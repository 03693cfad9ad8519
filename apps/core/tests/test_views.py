from django.conf import settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient


class TestTestingSettings:
    """Settings switched for the test run"""

    def test_ssl_redirect_disabled(self):
        assert settings.SECURE_SSL_REDIRECT is False

    def test_plain_http_request_not_redirected(self):
        response = APIClient().get(reverse('health-check'))

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'status': 'ok'}
