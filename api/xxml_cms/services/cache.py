"""Rendered-page invalidation hooks."""

import logging

logger = logging.getLogger(__name__)


class PathRevalidator:
    """
    Marks rendered pages as stale after content changes.

    The renderer lives outside this service; it drains the recorded paths and
    rebuilds them. Calls never fail and never block the mutation.
    """

    def __init__(self) -> None:
        self._stale: list[str] = []

    def revalidate(self, path: str) -> None:
        """Mark the page at ``path`` stale."""
        logger.debug("Revalidating %s", path)
        if path not in self._stale:
            self._stale.append(path)

    @property
    def stale_paths(self) -> list[str]:
        return list(self._stale)

    def drain(self) -> list[str]:
        """Return and forget the stale paths recorded so far."""
        paths, self._stale = self._stale, []
        return paths
