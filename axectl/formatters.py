"""Terminal formatters for telemetry and dashboard payloads."""

from __future__ import annotations

import json
from typing import Any

from axectl._util import format_duration, format_hashrate, milli_to_unit
from axectl.exceptions import InvalidJSONError
from axectl.models import TelemetryReading


class StatusFormatter:
    """Format a TelemetryReading as labelled lines, one metric per line."""

    def __init__(self, reading: TelemetryReading) -> None:
        self.reading = reading

    def format(self) -> str:
        """Return the status block as a string."""
        r = self.reading
        lines: list[str] = [
            f"Hashrate: {format_hashrate(r.hashrate)}",
            f"Core Temperature: {r.core_temperature:.1f}°C",
            f"VR Temperature: {r.vr_temperature:.1f}°C",
            f"Power: {r.power:.2f} W",
            f"Voltage: {milli_to_unit(r.voltage):.2f} V",
            f"Current: {milli_to_unit(r.current):.2f} A",
            f"WiFi Status: {r.wifi_status or '-'}",
            f"Uptime: {format_duration(r.uptime_seconds)}",
        ]
        return "\n".join(lines)

    def format_json(self) -> str:
        """Return the decoded reading as indented JSON."""
        return self.reading.model_dump_json(indent=2)


class DashboardFormatter:
    """Re-serialise a raw dashboard payload as stable, pretty-printed JSON."""

    def __init__(self, payload: Any) -> None:
        self.payload = payload

    def format(self) -> str:
        try:
            return json.dumps(self.payload, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            # numbers like 1e400 parse to inf, which has no JSON spelling
            raise InvalidJSONError(f"Dashboard payload cannot be written as JSON: {e}") from e
