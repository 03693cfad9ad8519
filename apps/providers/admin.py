from django.contrib import admin
from .models import Provider, WorkingHours, OfferedService


class WorkingHoursInline(admin.TabularInline):
    """Inline admin for weekly opening windows."""
    model = WorkingHours
    extra = 1
    fields = ['weekday', 'is_open', 'start_time', 'end_time']


class OfferedServiceInline(admin.TabularInline):
    """Inline admin for the provider's service catalog."""
    model = OfferedService
    extra = 1
    fields = ['name', 'duration_minutes', 'is_active']


@admin.register(Provider)
class ProviderAdmin(admin.ModelAdmin):
    """Admin interface for providers."""

    list_display = ['display_name', 'kind', 'company_name', 'user', 'is_active', 'created_at']
    list_filter = ['kind', 'is_active']
    search_fields = ['display_name', 'company_name', 'user__email']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [WorkingHoursInline, OfferedServiceInline]
    ordering = ['display_name']

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('user')
