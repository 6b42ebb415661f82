from seating.services.catalog_service import CatalogService, parse_event_id
from seating.services.reservation_builder import (
    ReservationBuilder,
    ReservationOutcome,
    ReservationRequest,
)
from seating.services.selection_engine import Pick, SelectionEngine, ToggleOutcome, ToggleResult
from seating.services.session_context import SessionContext
from seating.services.ticket_setup_validator import (
    TicketSetupDraft,
    TicketSetupValidator,
    ValidationResult,
    ZoneDraft,
)

__all__ = [
    "CatalogService",
    "parse_event_id",
    "ReservationBuilder",
    "ReservationOutcome",
    "ReservationRequest",
    "Pick",
    "SelectionEngine",
    "ToggleOutcome",
    "ToggleResult",
    "SessionContext",
    "TicketSetupDraft",
    "TicketSetupValidator",
    "ValidationResult",
    "ZoneDraft",
]
