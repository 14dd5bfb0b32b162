"""Pydantic model and decoders for AxeOS telemetry payloads."""

from __future__ import annotations

import json
from typing import Any

from loguru import logger
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from axectl.exceptions import InvalidJSONError, MalformedFieldError


class TelemetryReading(BaseModel):
    """Snapshot of device state at fetch time.

    Values are stored in the units the firmware reports: hashrate in GH/s,
    temperatures in °C, power in W, voltage in mV, current in mA.
    Every field is optional; firmware versions differ in what they send.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    hashrate: float = Field(0.0, validation_alias=AliasChoices("hashRate", "hashrate"))
    core_temperature: float = Field(0.0, validation_alias="temp")
    vr_temperature: float = Field(0.0, validation_alias="vrTemp")
    power: float = Field(0.0, validation_alias="power")
    voltage: float = Field(0.0, validation_alias="voltage")
    current: float = Field(0.0, validation_alias="current")
    wifi_status: str = Field("", validation_alias="wifiStatus")
    uptime_seconds: int = Field(0, validation_alias="uptimeSeconds")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # firmware reports unavailable sensors as null
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("uptime_seconds", mode="before")
    @classmethod
    def _whole_float_uptime(cls, value: Any) -> Any:
        # 8130.0 is a whole number of seconds, 8130.5 stays malformed
        if isinstance(value, float) and value.is_integer():
            return int(value)
        return value


def _reject_constant(token: str) -> Any:
    raise InvalidJSONError(f"Device returned invalid JSON: {token} is not a JSON value")


def decode_json(raw: bytes) -> Any:
    """Parse *raw* as JSON and return the generic Python value.

    Python's NaN, Infinity and -Infinity extensions are rejected.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidJSONError(f"Device returned invalid JSON: {e}") from e


def decode_telemetry(raw: bytes) -> TelemetryReading:
    """Decode a ``/api/system/info`` body into a TelemetryReading.

    Unknown keys are ignored and missing keys fall back to their defaults.
    A known key carrying the wrong JSON type raises MalformedFieldError.
    """
    payload = decode_json(raw)
    if not isinstance(payload, dict):
        raise InvalidJSONError(f"Expected a JSON object, got {type(payload).__name__}")

    try:
        reading = TelemetryReading.model_validate(payload, strict=True)
    except ValidationError as e:
        err = e.errors()[0]
        field = str(err["loc"][0]) if err["loc"] else "?"
        logger.debug(f"Telemetry validation failed: {e}")
        raise MalformedFieldError(field, f"Malformed field '{field}': {err['msg']}") from e

    logger.debug(f"Decoded telemetry: {reading!r}")
    return reading
