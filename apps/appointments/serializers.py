from rest_framework import serializers
from .models import Appointment, AppointmentStatus
from apps.accounts.models import User
from apps.providers.models import Provider, OfferedService


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'email', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class ProviderMinimalSerializer(serializers.ModelSerializer):
    """Minimal provider info for nested serialization."""

    class Meta:
        model = Provider
        fields = ['id', 'display_name', 'kind', 'company_name']
        read_only_fields = fields


class OfferedServiceSerializer(serializers.ModelSerializer):

    class Meta:
        model = OfferedService
        fields = ['id', 'name', 'duration_minutes']
        read_only_fields = fields


class AppointmentSerializer(serializers.ModelSerializer):
    """Main appointment serializer (read side)."""

    client = UserMinimalSerializer(read_only=True)
    provider = ProviderMinimalSerializer(read_only=True)
    service = OfferedServiceSerializer(read_only=True)
    scheduled_end = serializers.SerializerMethodField()

    class Meta:
        model = Appointment
        fields = [
            'id',
            'client',
            'provider',
            'service',
            'scheduled_date',
            'scheduled_time',
            'scheduled_end',
            'status',
            'location',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_scheduled_end(self, obj):
        return obj.scheduled_end.isoformat()


class AppointmentCreateSerializer(serializers.Serializer):
    """
    Booking request.

    ``client`` is only honoured for admins; everyone else books for themselves.
    """

    provider = serializers.UUIDField()
    service = serializers.UUIDField()
    scheduled_date = serializers.DateField()
    scheduled_time = serializers.TimeField()
    client = serializers.UUIDField(required=False)
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class AppointmentUpdateSerializer(serializers.Serializer):
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class RescheduleSerializer(serializers.Serializer):
    scheduled_date = serializers.DateField()
    scheduled_time = serializers.TimeField()


class AvailabilityQuerySerializer(serializers.Serializer):
    provider = serializers.UUIDField()
    date = serializers.DateField()
    time = serializers.TimeField()
    duration = serializers.IntegerField(required=False, min_value=1)
    service = serializers.UUIDField(required=False)


class FreeSlotsQuerySerializer(serializers.Serializer):
    provider = serializers.UUIDField()
    date = serializers.DateField()
    duration = serializers.IntegerField(required=False, min_value=1)
    service = serializers.UUIDField(required=False)


class AvailabilitySerializer(serializers.Serializer):
    provider = serializers.UUIDField()
    date = serializers.DateField()
    time = serializers.TimeField()
    available = serializers.BooleanField()


class FreeSlotSerializer(serializers.Serializer):
    start = serializers.TimeField()
    end = serializers.TimeField()


class FreeSlotsSerializer(serializers.Serializer):
    provider = serializers.UUIDField()
    date = serializers.DateField()
    duration_minutes = serializers.IntegerField()
    slots = FreeSlotSerializer(many=True)


class AppointmentStatisticsSerializer(serializers.Serializer):
    """Serializer for appointment statistics response."""

    total = serializers.IntegerField()
    by_status = serializers.DictField(child=serializers.IntegerField())
    completion_rate = serializers.FloatField()
    average_rating = serializers.FloatField(allow_null=True)


class StatusFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=AppointmentStatus.choices, required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    client = serializers.UUIDField(required=False)
    provider = serializers.UUIDField(required=False)
