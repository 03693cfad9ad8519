from rest_framework import serializers
from .models import Review
from apps.accounts.models import User
from apps.providers.models import Provider


class UserMinimalSerializer(serializers.ModelSerializer):
    """Minimal user info for nested serialization."""

    display_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'display_name']
        read_only_fields = fields

    def get_display_name(self, obj):
        return obj.get_display_name()


class ProviderMinimalSerializer(serializers.ModelSerializer):
    """Minimal provider info for nested serialization."""

    class Meta:
        model = Provider
        fields = ['id', 'display_name', 'kind']
        read_only_fields = fields


class ReviewSerializer(serializers.ModelSerializer):
    """Main review serializer."""

    client = UserMinimalSerializer(read_only=True)
    provider = ProviderMinimalSerializer(read_only=True)
    can_be_edited = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            'id',
            'appointment',
            'client',
            'provider',
            'rating',
            'comment',
            'can_be_edited',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_can_be_edited(self, obj):
        return obj.can_be_edited()


class ReviewCreateSerializer(serializers.Serializer):
    """
    Review submission.

    Rating range is left to the service layer so out-of-range values are
    reported with the domain error, never clamped.
    """

    appointment = serializers.UUIDField()
    provider = serializers.UUIDField(required=False)
    rating = serializers.IntegerField()
    comment = serializers.CharField(required=False, allow_blank=True, default='')


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(required=False)
    comment = serializers.CharField(required=False, allow_blank=True)


class ReviewFilterSerializer(serializers.Serializer):
    provider = serializers.UUIDField(required=False)
    client = serializers.UUIDField(required=False)
    rating = serializers.IntegerField(required=False, min_value=1, max_value=5)
    min_rating = serializers.IntegerField(required=False, min_value=1, max_value=5)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)


class EligibilityQuerySerializer(serializers.Serializer):
    appointment = serializers.UUIDField()


class EligibilitySerializer(serializers.Serializer):
    appointment = serializers.UUIDField()
    can_review = serializers.BooleanField()


class RatingStatisticsSerializer(serializers.Serializer):
    """Serializer for rating statistics."""

    total = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())


class ProviderReviewSummarySerializer(serializers.Serializer):
    """Summary of reviews for a specific provider."""

    provider_id = serializers.UUIDField()
    provider_name = serializers.CharField()
    total = serializers.IntegerField()
    average_rating = serializers.FloatField()
    rating_distribution = serializers.DictField(child=serializers.IntegerField())
    recent_reviews = ReviewSerializer(many=True)
