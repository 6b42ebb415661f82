from django.urls import path

from seating.handlers import (
    ReservationView,
    SeatMapView,
    SelectionToggleView,
    SelectionView,
    TicketSetupValidateView,
    TicketSetupView,
)

urlpatterns = [
    path("events/<str:event_id>/ticket-setup", TicketSetupView.as_view(), name="ticket-setup"),
    path(
        "events/<str:event_id>/ticket-setup/validate",
        TicketSetupValidateView.as_view(),
        name="ticket-setup-validate",
    ),
    path("events/<str:event_id>/seat-map", SeatMapView.as_view(), name="seat-map"),
    path("events/<str:event_id>/selection", SelectionView.as_view(), name="selection"),
    path(
        "events/<str:event_id>/selection/toggle",
        SelectionToggleView.as_view(),
        name="selection-toggle",
    ),
    path("events/<str:event_id>/reservations", ReservationView.as_view(), name="reservations"),
]
