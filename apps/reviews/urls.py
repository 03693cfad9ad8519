from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'reviews'

router = DefaultRouter()
router.register(r'', views.ReviewViewSet, basename='review')

urlpatterns = [
    # Review ViewSet routes
    # GET    /api/reviews/               - List reviews
    # POST   /api/reviews/               - Review a completed appointment
    # GET    /api/reviews/{id}/          - Get review
    # PATCH  /api/reviews/{id}/          - Partial update (edit window)
    # DELETE /api/reviews/{id}/          - Delete review

    # Custom review actions
    # GET    /api/reviews/eligibility/   - Can the current user review an appointment
    # GET    /api/reviews/statistics/    - Rating statistics

    # Provider review summary
    path('provider/<uuid:provider_id>/summary/', views.provider_review_summary, name='provider-review-summary'),

    # Review by appointment
    path('appointment/<uuid:appointment_id>/', views.appointment_review, name='appointment-review'),

    # Include router URLs
    path('', include(router.urls)),
]
