from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .base import FailureReason, HttpProvider, ResolutionError, safe_float
from ..entities import Location


class NominatimGeocoder(HttpProvider):
    """Resolve free-text addresses through the OpenStreetMap Nominatim search API.

    Only the first match is used. Every field a :class:`Location` needs must be
    present in that match; each missing field maps to its own
    :class:`FailureReason`.
    """

    name = "nominatim"
    error_class = ResolutionError
    base_url = "https://nominatim.openstreetmap.org/search"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url

    def resolve(self, address: str) -> Location:
        if not address or not address.strip():
            raise self._fail(FailureReason.EMPTY_ADDRESS, "address is empty")
        params = {"q": address, "format": "jsonv2", "addressdetails": 1, "limit": 1}
        response = self._get(self.base_url, params)
        matches = self._json(response)
        if not isinstance(matches, list):
            raise self._fail(FailureReason.INVALID_PAYLOAD, "expected a list of matches")
        if not matches:
            self._log.info("No geocoding match for %r", address)
            raise self._fail(FailureReason.NO_MATCH, "no match for address")
        location = self._to_location(matches[0])
        if isinstance(location, FailureReason):
            self._log.warning("Incomplete geocoding match for %r: %s", address, location.value)
            raise self._fail(location, f"incomplete match: {location.value}")
        return location

    # helpers ------------------------------------------------------------
    def _to_location(self, match: Any) -> Union[Location, FailureReason]:
        if not isinstance(match, Mapping):
            return FailureReason.INVALID_PAYLOAD
        address = match.get("address")
        if not isinstance(address, Mapping):
            address = {}

        latitude = safe_float(match.get("lat"))
        if latitude is None:
            return FailureReason.MISSING_LATITUDE
        longitude = safe_float(match.get("lon"))
        if longitude is None:
            return FailureReason.MISSING_LONGITUDE
        country_code = _clean(address.get("country_code"))
        if not country_code:
            return FailureReason.MISSING_COUNTRY_CODE
        postal_code = _clean(address.get("postcode"))
        if not postal_code:
            return FailureReason.MISSING_POSTAL_CODE
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            return FailureReason.INVALID_COORDINATES

        return Location(
            latitude=latitude,
            longitude=longitude,
            country_code=country_code.lower(),
            postal_code=postal_code,
        )


def _clean(value: Optional[object]) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


__all__ = ["NominatimGeocoder"]
