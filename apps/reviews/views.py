from rest_framework import status, mixins, viewsets, serializers as drf_serializers
from rest_framework.decorators import api_view, action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .models import Review
from .serializers import (
    ReviewSerializer,
    ReviewCreateSerializer,
    ReviewUpdateSerializer,
    ReviewFilterSerializer,
    EligibilityQuerySerializer,
    EligibilitySerializer,
    RatingStatisticsSerializer,
    ProviderReviewSummarySerializer,
)
from .permissions import IsReviewAuthorOrReadOnly
from .services import (
    can_review,
    create_review,
    update_review,
    delete_review,
    list_reviews,
    get_review_for_appointment,
    get_rating_statistics,
    get_provider_review_summary,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    kind = drf_serializers.CharField()


class ReviewPagination(PageNumberPagination):
    """Custom pagination for reviews."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ReviewViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet
):
    """
    ViewSet for Review operations.

    list: Get all reviews (with filters)
    create: Review a completed appointment
    retrieve: Get a specific review
    partial_update: Update a review (author only, within the edit window)
    destroy: Delete a review (author or admin)
    eligibility: Whether the current user can review an appointment
    statistics: Rating aggregates
    """

    queryset = Review.objects.select_related('client', 'provider', 'appointment')
    serializer_class = ReviewSerializer
    permission_classes = [IsAuthenticated, IsReviewAuthorOrReadOnly]
    pagination_class = ReviewPagination

    @extend_schema(
        parameters=[
            OpenApiParameter('provider', OpenApiTypes.UUID, description='Filter by provider'),
            OpenApiParameter('client', OpenApiTypes.UUID, description='Filter by author'),
            OpenApiParameter('rating', OpenApiTypes.INT, description='Exact rating'),
            OpenApiParameter('min_rating', OpenApiTypes.INT, description='Minimum rating'),
        ],
    )
    def list(self, request, *args, **kwargs):
        """List reviews using service layer."""
        filters = ReviewFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        reviews = list_reviews(
            provider_id=params.get('provider'),
            client_id=params.get('client'),
            rating=params.get('rating'),
            min_rating=params.get('min_rating'),
        )

        page = self.paginate_queryset(reviews)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(reviews, many=True)
        return Response(serializer.data)

    @extend_schema(
        request=ReviewCreateSerializer,
        responses={
            201: ReviewSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        description="Review a completed appointment. One review per appointment.",
    )
    def create(self, request):
        """Create review using service layer."""
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        review = create_review(
            appointment_id=serializer.validated_data['appointment'],
            client=request.user,
            provider_id=serializer.validated_data.get('provider'),
            rating=serializer.validated_data['rating'],
            comment=serializer.validated_data.get('comment', ''),
        )

        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ReviewUpdateSerializer,
        responses={
            200: ReviewSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
        },
        description="Update rating or comment within the edit window.",
    )
    def partial_update(self, request, pk=None):
        """Update review using service layer."""
        instance = self.get_object()
        serializer = ReviewUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        review = update_review(
            review_id=instance.id,
            user=request.user,
            rating=serializer.validated_data.get('rating'),
            comment=serializer.validated_data.get('comment'),
        )

        return Response(ReviewSerializer(review).data)

    def destroy(self, request, pk=None):
        """Delete review using service layer."""
        instance = self.get_object()
        delete_review(review_id=instance.id, user=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        parameters=[OpenApiParameter('appointment', OpenApiTypes.UUID, required=True)],
        responses={200: EligibilitySerializer},
        description="Whether the current user can review an appointment.",
    )
    @action(detail=False, methods=['get'])
    def eligibility(self, request):
        query = EligibilityQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        appointment_id = query.validated_data['appointment']

        serializer = EligibilitySerializer({
            'appointment': appointment_id,
            'can_review': can_review(appointment_id=appointment_id, client_id=request.user.id),
        })
        return Response(serializer.data)

    @extend_schema(
        parameters=[
            OpenApiParameter('provider', OpenApiTypes.UUID),
            OpenApiParameter('client', OpenApiTypes.UUID),
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
        ],
        responses={200: RatingStatisticsSerializer},
    )
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Get rating statistics using service layer."""
        filters = ReviewFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        data = get_rating_statistics(
            provider_id=params.get('provider'),
            client_id=params.get('client'),
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )

        serializer = RatingStatisticsSerializer(data)
        return Response(serializer.data)


@extend_schema(
    responses={
        200: ProviderReviewSummarySerializer,
        404: ErrorResponseSerializer,
    },
    description="Review summary for a provider including rating breakdown and recent reviews.",
    tags=['reviews'],
)
@api_view(['GET'])
def provider_review_summary(request, provider_id):
    """Get review summary for a provider using service layer."""
    data = get_provider_review_summary(provider_id=provider_id)

    # Add recent reviews (not in service as it's view-specific)
    data['recent_reviews'] = list_reviews(provider_id=provider_id)[:5]

    serializer = ProviderReviewSummarySerializer(data)
    return Response(serializer.data)


@extend_schema(
    responses={
        200: ReviewSerializer,
        404: ErrorResponseSerializer,
    },
    description="Review left on an appointment.",
    tags=['reviews'],
)
@api_view(['GET'])
def appointment_review(request, appointment_id):
    """Get the review of an appointment using service layer."""
    review = get_review_for_appointment(appointment_id=appointment_id)

    serializer = ReviewSerializer(review)
    return Response(serializer.data)
