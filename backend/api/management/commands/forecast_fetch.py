"""Management command to fetch a forecast using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_forecast_service, serialize_result
from forecast_core.providers.base import ProviderError


class Command(BaseCommand):
    help = "Fetch the forecast for a free-text address"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--address", type=str, required=True, help="Free-text address")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        address = options["address"]
        if not address.strip():
            raise CommandError("--address must not be empty")
        try:
            result = get_forecast_service().get_forecast(address)
        except ProviderError as exc:
            raise CommandError(f"Forecast lookup failed: {exc.reason.value}") from exc

        self.stdout.write(json.dumps(serialize_result(result)))
