from django.contrib import admin
from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    """Admin interface for appointments."""

    list_display = [
        'provider',
        'client',
        'service',
        'scheduled_date',
        'scheduled_time',
        'status',
        'created_at'
    ]
    list_filter = ['status', 'scheduled_date', 'provider__kind']
    search_fields = [
        'client__email',
        'provider__display_name',
        'service__name',
        'location'
    ]
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'scheduled_date'
    ordering = ['-scheduled_date', '-scheduled_time']

    fieldsets = (
        ('Booking', {
            'fields': ('client', 'provider', 'service', 'status')
        }),
        ('Slot', {
            'fields': ('scheduled_date', 'scheduled_time')
        }),
        ('Details', {
            'fields': ('location', 'notes')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('client', 'provider', 'service')
