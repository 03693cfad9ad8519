import pytest
from apps.accounts.models import User, UserRole


@pytest.mark.django_db
class TestUserRoles:
    """Tests for role helpers used by the scheduling services"""

    def test_default_role_is_client(self):
        user = User.objects.create_user(email='c@example.com', password='TestPass123!')

        assert user.role == UserRole.CLIENT
        assert user.is_client
        assert not user.is_provider_side
        assert not user.is_admin

    @pytest.mark.parametrize('role', [UserRole.PROFESSIONAL, UserRole.COMPANY_EMPLOYEE])
    def test_provider_side_roles(self, role):
        user = User.objects.create_user(email='p@example.com', password='TestPass123!', role=role)

        assert user.is_provider_side
        assert not user.is_client

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser(email='a@example.com', password='TestPass123!')

        assert user.role == UserRole.ADMIN
        assert user.is_admin
        assert user.is_staff

    def test_email_required(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email='', password='TestPass123!')

    def test_display_name_falls_back_to_email(self):
        user = User.objects.create_user(email='jane.doe@example.com', password='TestPass123!')

        assert user.get_display_name() == 'jane.doe'
