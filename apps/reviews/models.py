# ==========================================
# apps/reviews/models.py
# ==========================================

from datetime import timedelta
from django.conf import settings
from django.db import models
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils import timezone
import uuid


class Review(models.Model):
    """Client's rating of a completed appointment; at most one per appointment."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    appointment = models.OneToOneField('appointments.Appointment', on_delete=models.CASCADE, related_name='review')
    client = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='reviews')
    provider = models.ForeignKey('providers.Provider', on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews'
        indexes = [
            models.Index(fields=['provider', 'rating'], name='reviews_provider_rating_idx'),
            models.Index(fields=['client', 'created_at'], name='reviews_client_created_idx'),
            models.Index(fields=['created_at'], name='reviews_created_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.client.get_display_name()} - {self.provider} ({self.rating}★)"

    @staticmethod
    def edit_window():
        return timedelta(hours=settings.SCHEDULING['REVIEW_EDIT_WINDOW_HOURS'])

    def can_be_edited(self, now=None):
        """True while less than the edit window has passed since creation."""
        now = now or timezone.now()
        return now - self.created_at < self.edit_window()
