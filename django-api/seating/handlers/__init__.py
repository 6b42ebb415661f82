from seating.handlers.views import (
    ReservationView,
    SeatMapView,
    SelectionToggleView,
    SelectionView,
    TicketSetupValidateView,
    TicketSetupView,
)

__all__ = [
    "ReservationView",
    "SeatMapView",
    "SelectionToggleView",
    "SelectionView",
    "TicketSetupValidateView",
    "TicketSetupView",
]
