"""Query run reporting models."""

from dataclasses import dataclass, field

from weathercli.models.weather import FetchOutcome


@dataclass
class QuerySummary:
    cities_requested: int = 0
    succeeded: int = 0
    failed: int = 0
    outcomes: list[FetchOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0
