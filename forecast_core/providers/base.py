from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Type

import requests
from requests import Response


class FailureReason(str, enum.Enum):
    UNREACHABLE = "unreachable"
    BAD_STATUS = "bad_status"
    INVALID_PAYLOAD = "invalid_payload"
    EMPTY_ADDRESS = "empty_address"
    NO_MATCH = "no_match"
    MISSING_LATITUDE = "missing_latitude"
    MISSING_LONGITUDE = "missing_longitude"
    MISSING_COUNTRY_CODE = "missing_country_code"
    MISSING_POSTAL_CODE = "missing_postal_code"
    INVALID_COORDINATES = "invalid_coordinates"
    MISSING_CURRENT_TEMPERATURE = "missing_current_temperature"


class ProviderError(RuntimeError):
    """Base provider error.

    ``reason`` lets callers branch on the failure kind without parsing the
    message.
    """

    def __init__(self, reason: FailureReason, message: str = "", provider: str = "") -> None:
        super().__init__(message or reason.value)
        self.reason = reason
        self.provider = provider


class ResolutionError(ProviderError):
    """Raised when an address cannot be converted to a location."""


class FetchError(ProviderError):
    """Raised when weather data cannot be obtained for a location."""


@dataclass
class RequestConfig:
    timeout: float = 10.0
    user_agent: Optional[str] = None


class HttpProvider:
    """Base class for single-attempt HTTP providers.

    Transport and status failures are translated into ``error_class`` so each
    provider surfaces exactly one error type.
    """

    name = "http"
    error_class: Type[ProviderError] = ProviderError

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or self._build_session(self.request_config)
        self._log = logging.getLogger(f"{type(self).__module__}.{type(self).__name__}")

    def _build_session(self, config: RequestConfig) -> requests.Session:
        session = requests.Session()
        if config.user_agent:
            session.headers["User-Agent"] = config.user_agent
        return session

    def _fail(self, reason: FailureReason, message: str = "") -> ProviderError:
        return self.error_class(reason, message, provider=self.name)

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text[:200])
            raise self._fail(FailureReason.BAD_STATUS, f"HTTP {response.status_code}")
        return response

    def _get(self, url: str, params: Mapping[str, Any]) -> Response:
        try:
            response = self.session.get(url, params=params, timeout=self.request_config.timeout)
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise self._fail(FailureReason.UNREACHABLE, "timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise self._fail(FailureReason.UNREACHABLE, "request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise self._fail(FailureReason.INVALID_PAYLOAD, "invalid json") from exc


def safe_float(value: Optional[object]) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


__all__ = [
    "FailureReason",
    "ProviderError",
    "ResolutionError",
    "FetchError",
    "RequestConfig",
    "HttpProvider",
    "safe_float",
]
