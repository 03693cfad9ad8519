# ==========================================
# apps/appointments/models.py
# ==========================================

from datetime import datetime, timedelta
from django.db import models
from django.db.models import Q
from django.utils import timezone
import uuid


class AppointmentStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    ACCEPTED = 'accepted', 'Accepted'
    COMPLETED = 'completed', 'Completed'
    CANCELLED = 'cancelled', 'Cancelled'


# Legal status changes, keyed by raw value; COMPLETED and CANCELLED are terminal
STATUS_TRANSITIONS = {
    AppointmentStatus.PENDING.value: {AppointmentStatus.ACCEPTED.value, AppointmentStatus.CANCELLED.value},
    AppointmentStatus.ACCEPTED.value: {AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value},
    AppointmentStatus.COMPLETED.value: set(),
    AppointmentStatus.CANCELLED.value: set(),
}

# Statuses that may still be rescheduled or have details edited
OPEN_STATUSES = (AppointmentStatus.PENDING.value, AppointmentStatus.ACCEPTED.value)


class Appointment(models.Model):
    """Booking of a provider's time slot by a client."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='appointments')
    provider = models.ForeignKey('providers.Provider', on_delete=models.CASCADE, related_name='appointments')
    service = models.ForeignKey('providers.OfferedService', on_delete=models.PROTECT, related_name='appointments')
    scheduled_date = models.DateField()
    scheduled_time = models.TimeField()
    status = models.CharField(max_length=20, choices=AppointmentStatus.choices, default=AppointmentStatus.PENDING)
    location = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'appointments'
        constraints = [
            # Authoritative double-booking guard; cancelled rows free their slot
            models.UniqueConstraint(
                fields=['provider', 'scheduled_date', 'scheduled_time'],
                condition=~Q(status='cancelled'),
                name='unique_active_provider_slot',
            ),
        ]
        indexes = [
            models.Index(fields=['provider', 'scheduled_date'], name='appt_provider_date_idx'),
            models.Index(fields=['client', 'scheduled_date'], name='appt_client_date_idx'),
            models.Index(fields=['status'], name='appt_status_idx'),
        ]
        ordering = ['-scheduled_date', '-scheduled_time']

    def __str__(self):
        return f"{self.provider} @ {self.scheduled_date} {self.scheduled_time:%H:%M} ({self.status})"

    @property
    def scheduled_start(self):
        """Aware datetime of the slot start in the current timezone."""
        return timezone.make_aware(datetime.combine(self.scheduled_date, self.scheduled_time))

    @property
    def scheduled_end(self):
        return self.scheduled_start + timedelta(minutes=self.service.duration_minutes)

    @property
    def is_terminal(self):
        return not STATUS_TRANSITIONS[str(self.status)]

    def can_transition_to(self, status):
        return str(status) in STATUS_TRANSITIONS[str(self.status)]

    def is_participant(self, user):
        """Client of the booking or the user operating its provider."""
        if user is None:
            return False
        return self.client_id == user.id or self.provider.is_operated_by(user)
