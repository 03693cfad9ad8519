from rest_framework import status, mixins, viewsets, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from django.db.models import Q
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.providers.models import Provider, OfferedService
from .models import Appointment
from .permissions import IsAppointmentParticipant, CanBookAppointments
from .serializers import (
    AppointmentSerializer,
    AppointmentCreateSerializer,
    AppointmentUpdateSerializer,
    RescheduleSerializer,
    AvailabilityQuerySerializer,
    AvailabilitySerializer,
    FreeSlotsQuerySerializer,
    FreeSlotsSerializer,
    AppointmentStatisticsSerializer,
    StatusFilterSerializer,
)
from .services import (
    create_appointment,
    accept_appointment,
    complete_appointment,
    cancel_appointment,
    reschedule_appointment,
    update_appointment_details,
    list_appointments,
    is_slot_available,
    get_free_slots,
    slot_end,
    get_appointment_statistics,
    ServiceNotFoundError,
    UnauthorizedAppointmentActionError,
)
from .services.availability import default_slot_minutes


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    kind = drf_serializers.CharField()


class AppointmentPagination(PageNumberPagination):
    """Custom pagination for appointments."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def _service_duration(provider_id, service_id):
    """Duration of a provider's active service, or None when not requested."""
    if not service_id:
        return None
    try:
        return OfferedService.objects.get(
            id=service_id,
            provider_id=provider_id,
            is_active=True
        ).duration_minutes
    except OfferedService.DoesNotExist:
        raise ServiceNotFoundError()


def _statistics_scope(user, provider_id, client_id):
    """
    Resolve the (provider, client) scope a user may see statistics for.

    Admins see any scope. Everyone else sees their own client figures or
    the figures of the provider they operate, which is also the default
    when no filter is given.
    """
    if user.is_admin:
        return provider_id, client_id

    if provider_id is None and client_id is None:
        own_provider = Provider.objects.filter(user=user).values_list('id', flat=True).first()
        if user.is_provider_side and own_provider:
            return own_provider, None
        return None, user.id

    if client_id is not None and client_id != user.id:
        raise UnauthorizedAppointmentActionError("You can only view your own statistics")

    if provider_id is not None and not Provider.objects.filter(id=provider_id, user=user).exists():
        raise UnauthorizedAppointmentActionError("You can only view statistics of your own provider")

    return provider_id, client_id


class AppointmentViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for appointment booking and lifecycle.

    list: Appointments the user takes part in (admins see all)
    create: Book a slot (client books for themself)
    retrieve: Get a specific appointment
    partial_update: Edit location/notes of an open appointment
    accept / complete / cancel: Status transitions
    reschedule: Move an open appointment to another slot
    availability / free_slots: Provider free/busy lookups
    statistics: Counts per status, completion rate, average rating
    """

    queryset = Appointment.objects.select_related('client', 'provider', 'service')
    serializer_class = AppointmentSerializer
    permission_classes = [IsAuthenticated, CanBookAppointments, IsAppointmentParticipant]
    pagination_class = AppointmentPagination

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user

        if not user.is_admin:
            queryset = queryset.filter(Q(client=user) | Q(provider__user=user))

        return queryset

    @extend_schema(
        parameters=[
            OpenApiParameter('client', OpenApiTypes.UUID, description='Filter by client'),
            OpenApiParameter('provider', OpenApiTypes.UUID, description='Filter by provider'),
            OpenApiParameter('status', OpenApiTypes.STR, description='pending/accepted/completed/cancelled'),
            OpenApiParameter('date_from', OpenApiTypes.DATE, description='Scheduled on or after'),
            OpenApiParameter('date_to', OpenApiTypes.DATE, description='Scheduled on or before'),
        ],
    )
    def list(self, request, *args, **kwargs):
        """List appointments using service layer, scoped to the caller."""
        filters = StatusFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        queryset = list_appointments(
            client_id=params.get('client'),
            provider_id=params.get('provider'),
            status=params.get('status'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )
        if not request.user.is_admin:
            queryset = queryset.filter(Q(client=request.user) | Q(provider__user=request.user))

        page = self.paginate_queryset(queryset)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=AppointmentCreateSerializer,
        responses={
            201: AppointmentSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Book a provider's slot. The new appointment is pending.",
    )
    def create(self, request):
        """Create appointment using service layer."""
        serializer = AppointmentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        client_id = request.user.id
        if request.user.is_admin and data.get('client'):
            client_id = data['client']

        appointment = create_appointment(
            client_id=client_id,
            provider_id=data['provider'],
            service_id=data['service'],
            scheduled_date=data['scheduled_date'],
            scheduled_time=data['scheduled_time'],
            location=data.get('location', ''),
            notes=data.get('notes', ''),
        )

        return Response(
            AppointmentSerializer(appointment).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        request=AppointmentUpdateSerializer,
        responses={
            200: AppointmentSerializer,
            404: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Edit location and notes of a pending or accepted appointment.",
    )
    def partial_update(self, request, pk=None):
        """Update appointment details using service layer."""
        instance = self.get_object()
        serializer = AppointmentUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        appointment = update_appointment_details(
            appointment_id=instance.id,
            actor=request.user,
            location=serializer.validated_data.get('location'),
            notes=serializer.validated_data.get('notes'),
        )

        return Response(AppointmentSerializer(appointment).data)

    def _transition(self, service):
        appointment = self.get_object()
        appointment = service(appointment_id=appointment.id, actor=self.request.user)
        return Response(AppointmentSerializer(appointment).data)

    @extend_schema(
        request=None,
        responses={200: AppointmentSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        description="Provider accepts a pending appointment.",
    )
    @action(detail=True, methods=['post'])
    def accept(self, request, pk=None):
        return self._transition(accept_appointment)

    @extend_schema(
        request=None,
        responses={200: AppointmentSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        description="Provider marks an accepted appointment as completed.",
    )
    @action(detail=True, methods=['post'])
    def complete(self, request, pk=None):
        return self._transition(complete_appointment)

    @extend_schema(
        request=None,
        responses={200: AppointmentSerializer, 403: ErrorResponseSerializer, 409: ErrorResponseSerializer},
        description="Cancel a pending or accepted appointment, freeing its slot.",
    )
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        return self._transition(cancel_appointment)

    @extend_schema(
        request=RescheduleSerializer,
        responses={
            200: AppointmentSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
        },
        description="Move a pending or accepted appointment to another slot.",
    )
    @action(detail=True, methods=['post'])
    def reschedule(self, request, pk=None):
        """Reschedule appointment using service layer."""
        appointment = self.get_object()
        serializer = RescheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        appointment = reschedule_appointment(
            appointment_id=appointment.id,
            scheduled_date=serializer.validated_data['scheduled_date'],
            scheduled_time=serializer.validated_data['scheduled_time'],
            actor=request.user,
        )

        return Response(AppointmentSerializer(appointment).data)

    @extend_schema(
        parameters=[
            OpenApiParameter('provider', OpenApiTypes.UUID, required=True),
            OpenApiParameter('date', OpenApiTypes.DATE, required=True),
            OpenApiParameter('time', OpenApiTypes.TIME, required=True),
            OpenApiParameter('service', OpenApiTypes.UUID, description='Check the whole service duration'),
            OpenApiParameter('duration', OpenApiTypes.INT, description='Duration in minutes'),
        ],
        responses={200: AvailabilitySerializer, 404: ErrorResponseSerializer},
        description="Check whether a provider is free at a date and time.",
    )
    @action(detail=False, methods=['get'])
    def availability(self, request):
        """Check provider availability using service layer."""
        query = AvailabilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        duration = _service_duration(params['provider'], params.get('service')) or params.get('duration')

        available = is_slot_available(
            provider_id=params['provider'],
            scheduled_date=params['date'],
            scheduled_time=params['time'],
            duration_minutes=duration,
        )

        serializer = AvailabilitySerializer({
            'provider': params['provider'],
            'date': params['date'],
            'time': params['time'],
            'available': available,
        })
        return Response(serializer.data)

    @extend_schema(
        parameters=[
            OpenApiParameter('provider', OpenApiTypes.UUID, required=True),
            OpenApiParameter('date', OpenApiTypes.DATE, required=True),
            OpenApiParameter('service', OpenApiTypes.UUID, description='Size slots to this service'),
            OpenApiParameter('duration', OpenApiTypes.INT, description='Duration in minutes'),
        ],
        responses={200: FreeSlotsSerializer, 404: ErrorResponseSerializer},
        description="List bookable start times for a provider on a date.",
    )
    @action(detail=False, methods=['get'])
    def free_slots(self, request):
        """List free slots using service layer."""
        query = FreeSlotsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        params = query.validated_data

        duration = _service_duration(params['provider'], params.get('service')) or params.get('duration')

        slots = get_free_slots(
            provider_id=params['provider'],
            scheduled_date=params['date'],
            duration_minutes=duration,
        )

        duration = duration or default_slot_minutes()

        serializer = FreeSlotsSerializer({
            'provider': params['provider'],
            'date': params['date'],
            'duration_minutes': duration,
            'slots': [{'start': start, 'end': slot_end(start, duration)} for start in slots],
        })
        return Response(serializer.data)

    @extend_schema(
        parameters=[
            OpenApiParameter('provider', OpenApiTypes.UUID),
            OpenApiParameter('client', OpenApiTypes.UUID),
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
        ],
        responses={200: AppointmentStatisticsSerializer, 403: ErrorResponseSerializer},
        description="Counts per status, completion rate and average rating. "
                    "Non-admins only see their own client or provider figures.",
    )
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Get appointment statistics using service layer."""
        filters = StatusFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        provider_id, client_id = _statistics_scope(
            request.user, params.get('provider'), params.get('client')
        )

        data = get_appointment_statistics(
            provider_id=provider_id,
            client_id=client_id,
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )

        serializer = AppointmentStatisticsSerializer(data)
        return Response(serializer.data)
