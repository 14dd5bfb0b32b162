"""Private unit and formatting helpers for the renderers."""

from __future__ import annotations

_HASHRATE_PREFIXES = ["", "K", "M", "G", "T", "P", "E"]


def format_hashrate(ghs: float) -> str:
    """Format a hashrate given in GH/s with a fitting SI prefix.

    E.g. 450.2 -> '450.20 GH/s', 1234.0 -> '1.23 TH/s', 0.5 -> '500.00 MH/s'
    """
    value = ghs * 1e9
    idx = 0
    while abs(value) >= 1000 and idx < len(_HASHRATE_PREFIXES) - 1:
        value /= 1000
        idx += 1
    return f"{value:.2f} {_HASHRATE_PREFIXES[idx]}H/s"


def format_duration(seconds: int) -> str:
    """Return e.g. '2h 15m 30s' for 8130.

    Days appear once the value reaches a full day. Leading zero units are
    omitted, inner ones kept ('1h 0m 5s').
    """
    seconds = max(int(seconds), 0)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    mins, secs = divmod(rest, 60)

    parts: list[str] = []
    if days:
        parts.append(f"{days}d")
    if days or hours:
        parts.append(f"{hours}h")
    if days or hours or mins:
        parts.append(f"{mins}m")
    parts.append(f"{secs}s")
    return " ".join(parts)


def milli_to_unit(value: float) -> float:
    """Convert mV/mA as reported by the firmware to V/A."""
    return value / 1000.0


def normalize_base_url(host: str) -> str:
    """Prepend ``http://`` to a bare host and strip trailing slashes.

    E.g. '192.168.1.50' -> 'http://192.168.1.50'
    """
    host = host.strip()
    if "://" not in host:
        host = f"http://{host}"
    return host.rstrip("/")
