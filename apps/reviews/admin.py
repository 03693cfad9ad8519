from django.contrib import admin
from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    """Admin interface for Reviews."""

    list_display = [
        'provider',
        'client',
        'rating',
        'editable',
        'created_at'
    ]
    list_filter = [
        'rating',
        'created_at',
    ]
    search_fields = [
        'provider__display_name',
        'client__email',
        'comment'
    ]
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['appointment']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('appointment', 'client', 'provider', 'rating')
        }),
        ('Comment', {
            'fields': ('comment',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def editable(self, obj):
        """Whether the author can still edit the review."""
        return obj.can_be_edited()
    editable.boolean = True

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('client', 'provider', 'appointment')
