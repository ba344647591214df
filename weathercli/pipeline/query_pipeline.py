"""Query pipeline: resolve city tokens, then fetch and present each city in turn."""

import logging
import sys
import time
from collections.abc import Sequence
from typing import TextIO

from weathercli.ingest.query_resolver import resolve
from weathercli.ingest.weather_fetcher import WeatherFetcher
from weathercli.models.reporting import QuerySummary
from weathercli.models.weather import Failure, Success, UnitSelector
from weathercli.reporting.formatters import format_failure, render
from weathercli.storage.favorites_repo import FavoritesRepo

logger = logging.getLogger(__name__)


class QueryPipeline:
    def __init__(
        self,
        fetcher: WeatherFetcher,
        favorites: FavoritesRepo,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        self.fetcher = fetcher
        self.favorites = favorites
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def resolve(self, tokens: Sequence[str]) -> list[str]:
        """Expand tokens, reading favorites only if the reserved token is used.

        Raises CorruptFavoritesError or OSError from the favorites store.
        """
        return resolve(tokens, self.favorites.load)

    def run(
        self,
        cities: Sequence[str],
        api_key: str,
        unit: UnitSelector = UnitSelector.CELSIUS,
        details: bool = False,
        fmt: str = "text",
    ) -> QuerySummary:
        """Fetch each resolved city sequentially, presenting results as they arrive."""
        start_time = time.monotonic()
        summary = QuerySummary(cities_requested=len(cities))

        for city in cities:
            outcome = self.fetcher.fetch(city, api_key)
            summary.outcomes.append(outcome)
            if isinstance(outcome, Success):
                summary.succeeded += 1
                render(outcome.report, unit, details, out=self.out, fmt=fmt)
            elif isinstance(outcome, Failure):
                summary.failed += 1
                self.err.write(format_failure(outcome) + "\n")
            self.out.flush()

        summary.duration_seconds = time.monotonic() - start_time
        logger.info(
            "Queried %d cities: %d succeeded, %d failed in %.1fs",
            summary.cities_requested, summary.succeeded, summary.failed,
            summary.duration_seconds,
        )
        return summary
