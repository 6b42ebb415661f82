"""Serializers for request parsing and for rendering domain models.

Input serializers check shape only (types, lists, ranges of coordinates).
Whether a setup makes sense is the validator's call, so nearly every
setup field is accepted raw and passed through.
"""

from typing import Any

from rest_framework import serializers

from seating.domain import Violation, Zone
from seating.domain.formatting import money_to_wire
from seating.services import SelectionEngine, TicketSetupDraft, ZoneDraft

ZONE_ALIASES = {
    "name": ("zone", "code"),
    "seatRows": ("seatRow", "rows"),
    "seatColumns": ("seatColumn", "cols", "columns"),
}
SETUP_ALIASES = {
    "globalRows": ("seatRows",),
    "globalCols": ("seatColumns",),
    "salesStartDatetime": ("salesStartDateTime",),
    "salesEndDatetime": ("salesEndDateTime",),
}


def _apply_aliases(data: Any, aliases: dict[str, tuple[str, ...]]) -> Any:
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for canonical, names in aliases.items():
        if data.get(canonical) is None:
            for name in names:
                if data.get(name) is not None:
                    data[canonical] = data[name]
                    break
    return data


class ZoneDraftSerializer(serializers.Serializer):
    id = serializers.JSONField(required=False, allow_null=True)
    name = serializers.JSONField(required=False, allow_null=True)
    price = serializers.JSONField(required=False, allow_null=True)
    seatRows = serializers.JSONField(required=False, allow_null=True)
    seatColumns = serializers.JSONField(required=False, allow_null=True)
    ticketTypeId = serializers.JSONField(required=False, allow_null=True)

    def to_internal_value(self, data: Any) -> dict[str, Any]:
        return super().to_internal_value(_apply_aliases(data, ZONE_ALIASES))


class SalesWindowInputSerializer(serializers.Serializer):
    start = serializers.JSONField(required=False, allow_null=True)
    end = serializers.JSONField(required=False, allow_null=True)


class TicketSetupSerializer(serializers.Serializer):
    zones = ZoneDraftSerializer(many=True, required=False)
    globalRows = serializers.JSONField(required=False, allow_null=True)
    globalCols = serializers.JSONField(required=False, allow_null=True)
    minPerOrder = serializers.JSONField(required=False, allow_null=True)
    maxPerOrder = serializers.JSONField(required=False, allow_null=True)
    active = serializers.BooleanField(required=False, default=True)
    salesWindow = SalesWindowInputSerializer(required=False)
    salesStartDatetime = serializers.JSONField(required=False, allow_null=True)
    salesEndDatetime = serializers.JSONField(required=False, allow_null=True)
    salesStartDate = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    salesStartTime = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    salesEndDate = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    salesEndTime = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_internal_value(self, data: Any) -> dict[str, Any]:
        return super().to_internal_value(_apply_aliases(data, SETUP_ALIASES))

    def to_draft(self) -> TicketSetupDraft:
        data = self.validated_data
        window = data.get("salesWindow") or {}
        return TicketSetupDraft(
            zones=[
                ZoneDraft(
                    name=z.get("name"),
                    price=z.get("price"),
                    seat_rows=z.get("seatRows"),
                    seat_columns=z.get("seatColumns"),
                    id=z.get("id"),
                    ticket_type_id=z.get("ticketTypeId"),
                )
                for z in data.get("zones", [])
            ],
            global_rows=data.get("globalRows"),
            global_cols=data.get("globalCols"),
            min_per_order=data.get("minPerOrder"),
            max_per_order=data.get("maxPerOrder"),
            sales_start=window.get("start", data.get("salesStartDatetime")),
            sales_end=window.get("end", data.get("salesEndDatetime")),
            sales_start_date=data.get("salesStartDate"),
            sales_start_time=data.get("salesStartTime"),
            sales_end_date=data.get("salesEndDate"),
            sales_end_time=data.get("salesEndTime"),
            active=data.get("active", True),
        )


class ToggleSerializer(serializers.Serializer):
    zoneId = serializers.JSONField()
    row = serializers.IntegerField(min_value=0)
    col = serializers.IntegerField(min_value=0)

    def validate_zoneId(self, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, int | str):
            raise serializers.ValidationError("zoneId must be a number or a string")
        return value


class ReservationSubmitSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, max_length=500)


class ViolationSerializer(serializers.Serializer):
    """Serializer for Violation domain values."""

    code = serializers.SerializerMethodField()
    message = serializers.CharField()
    field = serializers.CharField(allow_null=True)
    zoneIndex = serializers.IntegerField(source="zone_index", allow_null=True)

    def get_code(self, obj: Violation) -> str:
        return obj.code.value


class ZoneSerializer(serializers.Serializer):
    """Serializer for Zone domain model, occupancy included."""

    id = serializers.ReadOnlyField()
    name = serializers.CharField()
    code = serializers.CharField()
    rows = serializers.IntegerField(source="grid.rows")
    cols = serializers.IntegerField(source="grid.cols")
    price = serializers.SerializerMethodField()
    ticketTypeId = serializers.ReadOnlyField(source="ticket_type_id")
    occupiedSeats = serializers.SerializerMethodField()

    def get_price(self, obj: Zone) -> int | float | None:
        return money_to_wire(obj.price.amount) if obj.price is not None else None

    def get_occupiedSeats(self, obj: Zone) -> list[dict[str, int]]:
        return [{"r": s.row, "c": s.col} for s in sorted(obj.grid.occupied)]


def selection_data(engine: SelectionEngine) -> dict[str, Any]:
    return {
        "ticketTypeId": engine.ticket_type_id,
        "count": engine.count(),
        "totalPrice": money_to_wire(engine.total_price()),
        "seats": [
            {
                "zoneId": line.zone_id,
                "zoneName": line.zone_name,
                "row": line.row,
                "col": line.col,
                "rowLabel": line.row_label,
                "seatNumber": line.seat_number,
                "price": money_to_wire(line.price),
            }
            for line in engine.summary()
        ],
    }
