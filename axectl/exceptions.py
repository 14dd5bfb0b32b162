"""Exception hierarchy for device communication and payload decoding."""

EXIT_NETWORK = 1
EXIT_DECODE = 3
EXIT_CONFIG = 4


class AxeError(Exception):
    """Base exception for all axectl errors."""

    exit_code: int = 1


class ConfigError(AxeError):
    """No usable device host or an invalid configuration value."""

    exit_code = EXIT_CONFIG


class NetworkError(AxeError):
    """HTTP request to the device failed."""

    exit_code = EXIT_NETWORK


class DeviceUnreachableError(NetworkError):
    """Connection could not be established (refused, DNS failure, bad URL)."""


class DeviceTimeoutError(NetworkError):
    """Device did not answer within the configured timeout."""


class NonSuccessStatusError(NetworkError):
    """Device answered with a status outside 2xx."""

    def __init__(self, message: str, status_code: int):
        self.status_code = status_code
        super().__init__(message)


class DecodeError(AxeError):
    """Device payload could not be decoded."""

    exit_code = EXIT_DECODE


class InvalidJSONError(DecodeError):
    """Payload is not syntactically valid JSON or has the wrong top-level shape."""


class MalformedFieldError(DecodeError):
    """A known telemetry field is present with the wrong JSON type."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"Malformed field '{field}' in telemetry payload")
