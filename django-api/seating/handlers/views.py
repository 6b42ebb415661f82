"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details (upstream messages are forwarded as-is)
"""

import logging
from typing import Any
from zoneinfo import ZoneInfo

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from seating.domain import DomainError, ErrorCode, SaleStatus, ZoneCatalog
from seating.domain.errors import MESSAGES
from seating.domain.formatting import format_datetime, format_zone_prices, to_wire_datetime
from seating.handlers.serializers import (
    ReservationSubmitSerializer,
    TicketSetupSerializer,
    ToggleSerializer,
    ViolationSerializer,
    ZoneSerializer,
    selection_data,
)
from seating.services import (
    CatalogService,
    ReservationBuilder,
    SelectionEngine,
    SessionContext,
    TicketSetupValidator,
    ToggleOutcome,
    ValidationResult,
    parse_event_id,
)
from seating.stores import get_config_store, get_reservation_gateway

logger = logging.getLogger(__name__)

STATUS_BY_CODE = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFIGURATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.MALFORMED_CONFIGURATION: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.TRANSPORT_FAILURE: status.HTTP_502_BAD_GATEWAY,
}


def error_response(code: ErrorCode, message: str, http_status: int, **extra: Any) -> Response:
    return Response({"error": {"code": code.value, "message": message}, **extra}, status=http_status)


def authoring_tz() -> ZoneInfo:
    return ZoneInfo(settings.SEATING["AUTHORING_TIME_ZONE"])


def catalog_service() -> CatalogService:
    return CatalogService(get_config_store(), TicketSetupValidator(authoring_tz()))


class SeatingAPIView(APIView):
    """Maps raised DomainErrors to JSON error responses."""

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, DomainError):
            http_status = STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST)
            if http_status >= 500:
                logger.warning("%s %s failed: %s", self.request.method, self.request.path, exc)
            return error_response(exc.code, exc.message, http_status)
        return super().handle_exception(exc)


class BuyerFlowMixin:
    """Rebuilds the buyer's SelectionEngine from the session on each request."""

    def open_flow(self, request: Request, event_id: str) -> tuple[ZoneCatalog, SessionContext, SelectionEngine]:
        catalog = catalog_service().load_catalog(event_id)
        session = SessionContext(request.session)
        session.start(parse_event_id(event_id).value)
        engine = SelectionEngine(catalog)
        if engine.restore(session.picks):
            session.save_picks(engine.picks)
        return catalog, session, engine

    def refuse_unless_on_sale(self, catalog: ZoneCatalog) -> Response | None:
        if catalog.sale_status(timezone.now()) is SaleStatus.ON_SALE:
            return None
        return error_response(
            ErrorCode.SALES_CLOSED, MESSAGES[ErrorCode.SALES_CLOSED], status.HTTP_409_CONFLICT
        )


def _validation_failed(result: ValidationResult) -> Response:
    first = result.violations[0]
    return error_response(
        first.code,
        first.message,
        status.HTTP_400_BAD_REQUEST,
        violations=ViolationSerializer(result.violations, many=True).data,
    )


class TicketSetupView(SeatingAPIView):
    """Handler for GET/POST/PUT /api/events/{event_id}/ticket-setup"""

    def get(self, request: Request, event_id: str) -> Response:
        setup = catalog_service().get_setup(event_id)
        return Response({"exists": setup is not None, "setup": setup})

    def post(self, request: Request, event_id: str) -> Response:
        return self._save(request, event_id, update=False)

    def put(self, request: Request, event_id: str) -> Response:
        return self._save(request, event_id, update=True)

    def _save(self, request: Request, event_id: str, *, update: bool) -> Response:
        serializer = TicketSetupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = catalog_service().save_setup(event_id, serializer.to_draft(), update=update)
        if not result.ok:
            return _validation_failed(result)
        return Response(
            {"setup": result.payload},
            status=status.HTTP_200_OK if update else status.HTTP_201_CREATED,
        )


class TicketSetupValidateView(SeatingAPIView):
    """Handler for POST /api/events/{event_id}/ticket-setup/validate"""

    def post(self, request: Request, event_id: str) -> Response:
        parse_event_id(event_id)
        serializer = TicketSetupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = catalog_service().validate(serializer.to_draft())
        if not result.ok:
            return _validation_failed(result)
        return Response({"setup": result.payload})


class SeatMapView(BuyerFlowMixin, SeatingAPIView):
    """Handler for GET /api/events/{event_id}/seat-map"""

    def get(self, request: Request, event_id: str) -> Response:
        catalog, _, engine = self.open_flow(request, event_id)
        tz = authoring_tz()
        window = catalog.sales_window
        per_zone, total = catalog.seat_stats()
        return Response(
            {
                "eventId": parse_event_id(event_id).value,
                "saleStatus": catalog.sale_status(timezone.now()).value,
                "globalRows": catalog.global_rows,
                "globalCols": catalog.global_cols,
                "minPerOrder": catalog.min_per_order,
                "maxPerOrder": catalog.max_per_order,
                "priceDisplay": format_zone_prices(catalog.zones, settings.SEATING["CURRENCY_SYMBOL"]),
                "salesWindow": {
                    "start": to_wire_datetime(window.start) if window.start else None,
                    "end": to_wire_datetime(window.end) if window.end else None,
                    "startDisplay": format_datetime(window.start.astimezone(tz)) if window.start else None,
                    "endDisplay": format_datetime(window.end.astimezone(tz)) if window.end else None,
                },
                "zones": ZoneSerializer(catalog.zones, many=True).data,
                "stats": {
                    "zones": [
                        {
                            "zoneId": s.zone_id,
                            "capacity": s.capacity,
                            "occupied": s.occupied,
                            "available": s.available,
                        }
                        for s in per_zone
                    ],
                    "capacity": total.capacity,
                    "occupied": total.occupied,
                    "available": total.available,
                },
                "selection": selection_data(engine),
            }
        )


class SelectionView(BuyerFlowMixin, SeatingAPIView):
    """Handler for GET/DELETE /api/events/{event_id}/selection"""

    def get(self, request: Request, event_id: str) -> Response:
        _, session, engine = self.open_flow(request, event_id)
        return Response({**selection_data(engine), "lastReservationId": session.last_reservation_id})

    def delete(self, request: Request, event_id: str) -> Response:
        parse_event_id(event_id)
        SessionContext(request.session).clear()
        return Response(status=status.HTTP_204_NO_CONTENT)


class SelectionToggleView(BuyerFlowMixin, SeatingAPIView):
    """Handler for POST /api/events/{event_id}/selection/toggle"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = ToggleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        catalog, session, engine = self.open_flow(request, event_id)
        refused = self.refuse_unless_on_sale(catalog)
        if refused is not None:
            return refused

        data = serializer.validated_data
        result = engine.toggle(data["zoneId"], data["row"], data["col"])
        if result.outcome is ToggleOutcome.REJECTED:
            return error_response(
                result.error, result.message, status.HTTP_409_CONFLICT, selection=selection_data(engine)
            )
        if result.accepted:
            session.save_picks(engine.picks)
        return Response({"outcome": result.outcome.value, "selection": selection_data(engine)})


class ReservationView(BuyerFlowMixin, SeatingAPIView):
    """Handler for POST /api/events/{event_id}/reservations"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = ReservationSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        catalog, session, engine = self.open_flow(request, event_id)
        refused = self.refuse_unless_on_sale(catalog)
        if refused is not None:
            return refused

        builder = ReservationBuilder(get_reservation_gateway(), session)
        outcome = builder.submit(engine, parse_event_id(event_id), serializer.validated_data.get("notes"))
        if outcome.error is ErrorCode.TRANSPORT_FAILURE:
            return error_response(
                outcome.error, outcome.message, status.HTTP_502_BAD_GATEWAY, upstreamStatus=outcome.status
            )
        if not outcome.ok:
            return error_response(outcome.error, outcome.message, status.HTTP_409_CONFLICT)
        return Response(
            {
                "reservationId": outcome.reservation_id,
                "quantity": outcome.request.quantity,
                "totalAmount": outcome.request.to_payload()["totalAmount"],
                "ticketTypeId": outcome.request.ticket_type_id,
            },
            status=status.HTTP_201_CREATED,
        )
