"""AxeOS device monitor.

Read-only telemetry and emergency restart for a single Bitaxe-class miner
running AxeOS firmware.
"""

__version__ = "0.1.0"

import os
import sys
from typing import Any, Callable, Dict

from loguru import logger as glogger

glogger.disable(__name__)


def _loguru_skiplog_filter(record: dict) -> bool:  # type: ignore[type-arg]
    """Filter function to hide records with ``extra['skiplog']`` set."""
    return not record.get("extra", {}).get("skiplog", False)


def configure_logging(
    level: str = "WARNING",
    loguru_filter: Callable[[Dict[str, Any]], bool] = _loguru_skiplog_filter,
) -> None:
    """Configure a ``loguru`` stderr sink and enable logging for this package.

    ``LOGURU_LEVEL`` in the environment wins over *level*.
    """
    level = os.getenv("LOGURU_LEVEL", level)
    glogger.remove()
    logger_fmt: str = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{module}</cyan>::<cyan>{extra[classname]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
    )
    glogger.add(sys.stderr, level=level, format=logger_fmt, filter=loguru_filter)  # type: ignore[arg-type]
    glogger.configure(extra={"classname": "None", "skiplog": False})
    glogger.enable(__name__)


from axectl.exceptions import (  # noqa: E402
    AxeError,
    ConfigError,
    DecodeError,
    DeviceTimeoutError,
    DeviceUnreachableError,
    InvalidJSONError,
    MalformedFieldError,
    NetworkError,
    NonSuccessStatusError,
)
from axectl.models import TelemetryReading, decode_json, decode_telemetry  # noqa: E402
from axectl.transport import AxeOSTransport  # noqa: E402

__all__ = [
    "glogger",
    "configure_logging",
    "AxeOSTransport",
    "TelemetryReading",
    "decode_json",
    "decode_telemetry",
    "AxeError",
    "ConfigError",
    "NetworkError",
    "DeviceUnreachableError",
    "DeviceTimeoutError",
    "NonSuccessStatusError",
    "DecodeError",
    "InvalidJSONError",
    "MalformedFieldError",
]
