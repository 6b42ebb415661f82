"""Tests for building and submitting reservations.

Run with: pytest tests/test_reservation_builder.py -v
"""

from typing import Any

import pytest

from seating.domain import EventId
from seating.domain.errors import ErrorCode, GatewayError
from seating.services import (
    ReservationBuilder,
    ReservationOutcome,
    ReservationRequest,
    SelectionEngine,
    SessionContext,
)
from seating.stores.interfaces import ReservationGateway
from seating.stores.memory_store import InMemoryReservationGateway

from conftest import make_catalog

EVENT = EventId(42)


class FailingGateway(ReservationGateway):
    def __init__(self, error: GatewayError) -> None:
        self.error = error
        self.calls = 0

    def submit(self, payload: dict[str, Any]) -> int | str:
        self.calls += 1
        raise self.error


@pytest.fixture
def memory_gateway():
    return InMemoryReservationGateway()


@pytest.fixture
def engine(catalog):
    return SelectionEngine(catalog)


class TestPreconditions:
    """Submit is refused locally, without calling the gateway."""

    def test_empty_selection(self, memory_gateway, engine):
        """Given no picks, returns empty-selection."""
        outcome = ReservationBuilder(memory_gateway).submit(engine, EVENT)

        assert outcome.error is ErrorCode.EMPTY_SELECTION
        assert outcome.message == "Select at least one seat"
        assert memory_gateway.submitted == []

    def test_missing_ticket_type(self, memory_gateway):
        """Given picks in a zone without a ticket type, returns missing-ticket-type and keeps picks."""
        engine = SelectionEngine(make_catalog(zones=[{"id": 1, "name": "Balcony", "price": 800}]))
        engine.toggle(1, 0, 0)

        outcome = ReservationBuilder(memory_gateway).submit(engine, EVENT)

        assert outcome.error is ErrorCode.MISSING_TICKET_TYPE
        assert memory_gateway.submitted == []
        assert engine.count() == 1

    def test_below_min_per_order(self, memory_gateway):
        """Given fewer picks than the minimum, returns below-min-per-order."""
        engine = SelectionEngine(make_catalog(minPerOrder=2))
        engine.toggle(2, 0, 0)

        outcome = ReservationBuilder(memory_gateway).submit(engine, EVENT)

        assert outcome.error is ErrorCode.BELOW_MIN_PER_ORDER
        assert memory_gateway.submitted == []


class TestBuild:
    """Tests for the request payload."""

    def test_payload_follows_pick_order(self, memory_gateway, engine):
        """Given two picks, builds seat lines in pick order with trimmed notes."""
        engine.toggle(2, 1, 4)
        engine.toggle(2, 0, 0)

        request = ReservationBuilder(memory_gateway).build(engine, EVENT, notes="  aisle please ")

        assert isinstance(request, ReservationRequest)
        assert request.to_payload() == {
            "eventId": 42,
            "ticketTypeId": 2,
            "quantity": 2,
            "totalAmount": 3000,
            "seats": [
                {"zoneId": 2, "row": 1, "col": 4, "rowLabel": "B", "seatNumber": 5, "price": 1500, "ticketTypeId": 2},
                {"zoneId": 2, "row": 0, "col": 0, "rowLabel": "A", "seatNumber": 1, "price": 1500, "ticketTypeId": 2},
            ],
            "notes": "aisle please",
        }

    def test_blank_notes_are_left_out(self, memory_gateway, engine):
        """Given whitespace notes, omits the notes key."""
        engine.toggle(1, 0, 0)

        request = ReservationBuilder(memory_gateway).build(engine, EVENT, notes="   ")

        assert "notes" not in request.to_payload()

    def test_total_is_taken_at_build_time(self, memory_gateway, engine):
        """Each build captures the total of the picks at that moment."""
        builder = ReservationBuilder(memory_gateway)
        engine.toggle(2, 0, 0)
        first = builder.build(engine, EVENT)
        engine.toggle(2, 0, 1)
        second = builder.build(engine, EVENT)

        assert first.total_amount == 1500
        assert second.total_amount == 3000


class TestSubmit:
    """Tests for gateway submission."""

    def test_success_returns_id_and_resets(self, memory_gateway, engine):
        """Given an accepting gateway, returns the id and clears picks."""
        engine.toggle(1, 0, 0)

        outcome = ReservationBuilder(memory_gateway).submit(engine, EVENT)

        assert outcome.ok
        assert outcome.reservation_id == 1
        assert outcome.request.quantity == 1
        assert engine.count() == 0
        assert memory_gateway.submitted[0]["ticketTypeId"] == 1

    def test_success_is_recorded_in_session(self, memory_gateway, engine):
        """Given a session, records the reservation id and clears stored picks."""
        storage: dict[str, Any] = {}
        session = SessionContext(storage)
        session.start(42)
        engine.toggle(1, 0, 0)
        session.save_picks(engine.picks)

        ReservationBuilder(memory_gateway, session).submit(engine, EVENT)

        assert session.last_reservation_id == 1
        assert session.picks == []

    def test_transport_failure_is_forwarded_verbatim(self, engine):
        """Given a gateway error, returns its message and status and keeps picks."""
        gateway = FailingGateway(GatewayError("Seat A1 was just sold", status=409))
        engine.toggle(1, 0, 0)

        outcome = ReservationBuilder(gateway).submit(engine, EVENT)

        assert outcome == ReservationOutcome(
            error=ErrorCode.TRANSPORT_FAILURE, message="Seat A1 was just sold", status=409
        )
        assert gateway.calls == 1
        assert engine.count() == 1

    def test_resubmit_after_failure_is_a_new_attempt(self, engine):
        """Each submit calls the gateway once; there is no retry."""
        gateway = FailingGateway(GatewayError("connection reset"))
        builder = ReservationBuilder(gateway)
        engine.toggle(1, 0, 0)

        builder.submit(engine, EVENT)
        builder.submit(engine, EVENT)

        assert gateway.calls == 2
