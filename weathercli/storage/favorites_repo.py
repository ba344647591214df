"""Repository for the favorite cities list, persisted as a JSON array file."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class CorruptFavoritesError(Exception):
    """Raised when the favorites file is not a JSON array of strings."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class FavoritesRepo:
    """Ordered set of city names backed by a single file.

    Every mutation rewrites the whole file; there is no locking, so
    concurrent writers race and the last one wins.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def load(self) -> list[str]:
        """Return stored favorites, creating an empty record if none exists."""
        if not self.path.exists():
            logger.info("No favorites at %s, creating empty record", self.path)
            self._save([])
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise CorruptFavoritesError(
                f"Favorites file {self.path} is not valid JSON: {e}", self.path
            ) from e

        if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
            raise CorruptFavoritesError(
                f"Favorites file {self.path} must contain a JSON array of strings",
                self.path,
            )
        return data

    def add(self, city: str) -> bool:
        """Append a city if absent. Returns False when it was already stored."""
        favorites = self.load()
        if city in favorites:
            logger.debug("%s already in favorites", city)
            return False
        favorites.append(city)
        self._save(favorites)
        return True

    def remove(self, city: str) -> int:
        """Remove every exact match of a city. Returns the number removed."""
        favorites = self.load()
        kept = [c for c in favorites if c != city]
        self._save(kept)
        return len(favorites) - len(kept)

    def list_favorites(self) -> list[str]:
        return self.load()

    def _save(self, favorites: list[str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(favorites, indent=2), encoding="utf-8")
        logger.debug("Saved %d favorites to %s", len(favorites), self.path)
