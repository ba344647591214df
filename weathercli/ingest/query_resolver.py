"""Expands requested city tokens into the concrete cities to query."""

from collections.abc import Callable, Iterable, Sequence

from weathercli.models.weather import FAVORITES_TOKEN


def is_favorites_token(token: str) -> bool:
    return token.lower() == FAVORITES_TOKEN


def split_city_args(values: Iterable[str] | None) -> list[str]:
    """Flatten repeated and comma-separated --city values into tokens."""
    tokens: list[str] = []
    for value in values or []:
        for piece in value.split(","):
            piece = piece.strip()
            if piece:
                tokens.append(piece)
    return tokens


def resolve(
    tokens: Sequence[str],
    favorites: Sequence[str] | Callable[[], Sequence[str]],
) -> list[str]:
    """Splice the favorites list in place of each reserved token.

    Duplicates are kept, so a city requested twice is queried twice.
    ``favorites`` may be a callable; it is invoked at most once and only
    if a reserved token is present.
    """
    loaded: Sequence[str] | None = None
    cities: list[str] = []
    for token in tokens:
        if not is_favorites_token(token):
            cities.append(token)
            continue
        if loaded is None:
            loaded = favorites() if callable(favorites) else favorites
        cities.extend(loaded)
    return cities
