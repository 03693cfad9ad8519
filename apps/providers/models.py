# ==========================================
# apps/providers/models.py
# ==========================================

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
import uuid


class ProviderKind(models.TextChoices):
    PROFESSIONAL = 'professional', 'Independent Professional'
    COMPANY_EMPLOYEE = 'company_employee', 'Company Employee'


class Weekday(models.IntegerChoices):
    # Matches date.weekday()
    MONDAY = 0, 'Monday'
    TUESDAY = 1, 'Tuesday'
    WEDNESDAY = 2, 'Wednesday'
    THURSDAY = 3, 'Thursday'
    FRIDAY = 4, 'Friday'
    SATURDAY = 5, 'Saturday'
    SUNDAY = 6, 'Sunday'


class Provider(models.Model):
    """
    Service-performing party of an appointment.

    Independent professionals and company employees share this one model;
    scheduling only needs the id and the working-hours lookup.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField('accounts.User', on_delete=models.CASCADE, related_name='provider_profile')
    kind = models.CharField(max_length=20, choices=ProviderKind.choices, default=ProviderKind.PROFESSIONAL)
    display_name = models.CharField(max_length=200)
    company_name = models.CharField(max_length=200, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'providers'
        indexes = [
            models.Index(fields=['kind', 'is_active'], name='providers_kind_4d2e1a_idx'),
        ]
        ordering = ['display_name']

    def __str__(self):
        if self.company_name:
            return f"{self.display_name} ({self.company_name})"
        return self.display_name

    def get_working_windows(self, weekday):
        """
        Return the open (start, end) windows for a weekday, ordered by start.

        An empty list means the provider is closed or has no configured hours.
        """
        return [
            (entry.start_time, entry.end_time)
            for entry in self.working_hours.filter(weekday=weekday, is_open=True).order_by('start_time')
        ]

    def is_operated_by(self, user):
        return user is not None and self.user_id == user.id


class WorkingHours(models.Model):
    """One opening window of a provider on a weekday."""

    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name='working_hours')
    weekday = models.PositiveSmallIntegerField(choices=Weekday.choices)
    is_open = models.BooleanField(default=True)
    start_time = models.TimeField()
    end_time = models.TimeField()

    class Meta:
        db_table = 'provider_working_hours'
        unique_together = [['provider', 'weekday', 'start_time']]
        ordering = ['provider', 'weekday', 'start_time']

    def __str__(self):
        if not self.is_open:
            return f"{self.get_weekday_display()}: closed"
        return f"{self.get_weekday_display()}: {self.start_time:%H:%M}-{self.end_time:%H:%M}"

    def clean(self):
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValidationError({'end_time': 'End time must be after start time'})


class OfferedService(models.Model):
    """Catalog entry; its duration drives slot overlap checks."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    provider = models.ForeignKey(Provider, on_delete=models.CASCADE, related_name='services')
    name = models.CharField(max_length=200)
    duration_minutes = models.PositiveIntegerField(validators=[MinValueValidator(5)])
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'offered_services'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.duration_minutes} min)"
