from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'appointments'

router = DefaultRouter()
router.register(r'', views.AppointmentViewSet, basename='appointment')

urlpatterns = [
    # GET    /api/appointments/                 - List appointments
    # POST   /api/appointments/                 - Book a slot
    # GET    /api/appointments/{id}/            - Get appointment
    # PATCH  /api/appointments/{id}/            - Edit location/notes
    # POST   /api/appointments/{id}/accept/     - Accept
    # POST   /api/appointments/{id}/complete/   - Complete
    # POST   /api/appointments/{id}/cancel/     - Cancel
    # POST   /api/appointments/{id}/reschedule/ - Move to another slot
    # GET    /api/appointments/availability/    - Is a slot free
    # GET    /api/appointments/free_slots/      - Free start times for a day
    # GET    /api/appointments/statistics/      - Appointment statistics
    path('', include(router.urls)),
]
