"""Turns a finished selection into a reservation request and submits it."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from seating.domain import EventId
from seating.domain.errors import MESSAGES, ErrorCode, GatewayError
from seating.domain.formatting import money_to_wire
from seating.domain.models import ZoneKey
from seating.services.selection_engine import SelectionEngine, SelectionLine
from seating.services.session_context import SessionContext
from seating.stores.interfaces import ReservationGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReservationRequest:
    event_id: EventId
    ticket_type_id: ZoneKey
    lines: tuple[SelectionLine, ...]
    total_amount: Decimal
    notes: str | None = None

    @property
    def quantity(self) -> int:
        return len(self.lines)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "eventId": self.event_id.value,
            "ticketTypeId": self.ticket_type_id,
            "quantity": self.quantity,
            "totalAmount": money_to_wire(self.total_amount),
            "seats": [
                {
                    "zoneId": line.zone_id,
                    "row": line.row,
                    "col": line.col,
                    "rowLabel": line.row_label,
                    "seatNumber": line.seat_number,
                    "price": money_to_wire(line.price),
                    "ticketTypeId": self.ticket_type_id,
                }
                for line in self.lines
            ],
        }
        if self.notes:
            payload["notes"] = self.notes
        return payload


@dataclass(frozen=True)
class ReservationOutcome:
    reservation_id: int | str | None = None
    error: ErrorCode | None = None
    message: str | None = None
    status: int | None = None
    request: ReservationRequest | None = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def refused(cls, error: ErrorCode) -> "ReservationOutcome":
        return cls(error=error, message=MESSAGES[error])


class ReservationBuilder:
    """Checks submit preconditions, builds the payload, relays it once."""

    def __init__(self, gateway: ReservationGateway, session: SessionContext | None = None) -> None:
        self._gateway = gateway
        self._session = session

    def build(
        self, engine: SelectionEngine, event_id: EventId, notes: str | None = None
    ) -> ReservationRequest | ReservationOutcome:
        """Return the request, or a refused outcome when a precondition fails."""
        if engine.count() == 0:
            return ReservationOutcome.refused(ErrorCode.EMPTY_SELECTION)
        ticket_type_id = engine.ticket_type_id
        if ticket_type_id is None:
            return ReservationOutcome.refused(ErrorCode.MISSING_TICKET_TYPE)
        if engine.count() < engine.catalog.min_per_order:
            return ReservationOutcome.refused(ErrorCode.BELOW_MIN_PER_ORDER)
        return ReservationRequest(
            event_id=event_id,
            ticket_type_id=ticket_type_id,
            lines=tuple(engine.summary()),
            total_amount=engine.total_price(),
            notes=notes.strip() if notes and notes.strip() else None,
        )

    def submit(self, engine: SelectionEngine, event_id: EventId, notes: str | None = None) -> ReservationOutcome:
        built = self.build(engine, event_id, notes)
        if isinstance(built, ReservationOutcome):
            logger.debug("reservation refused for event %s: %s", event_id, built.error)
            return built

        try:
            reservation_id = self._gateway.submit(built.to_payload())
        except GatewayError as exc:
            logger.warning("reservation for event %s failed: %s", event_id, exc.message)
            return ReservationOutcome(
                error=exc.code, message=exc.message, status=exc.status, request=built
            )

        logger.info(
            "reservation %s created for event %s: %d seats, total %s",
            reservation_id, event_id, built.quantity, built.total_amount,
        )
        engine.reset()
        if self._session is not None:
            self._session.record_reservation(reservation_id)
        return ReservationOutcome(reservation_id=reservation_id, request=built)
