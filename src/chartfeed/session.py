"""ChartSession: tracks the selected symbol and its assembled feed."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from chartfeed.config import ChartFeedConfig
from chartfeed.feed import ChartFeed, assemble_feed
from chartfeed.store import BarStore

logger = logging.getLogger(__name__)


class ChartSession:
    """Holds the dashboard's current symbol and the feed built for it.

    ``load`` may be called again before an earlier call returns (e.g. the
    user switches symbols while a fetch is in flight). Only the result for
    the most recent selection is committed; older results are discarded.
    """

    def __init__(self, store: BarStore, config: ChartFeedConfig | None = None) -> None:
        self.store = store
        self.config = config or store.config
        self._lock = threading.Lock()
        self._generation = 0
        self._selected: Optional[str] = None
        self.symbol: Optional[str] = None
        self.feed: Optional[ChartFeed] = None

    @property
    def selected(self) -> Optional[str]:
        """Most recently requested symbol, committed or not."""
        return self._selected

    def load(self, symbol: str) -> Optional[ChartFeed]:
        """Select ``symbol``, fetch its bars and build its feed.

        Returns the committed feed, or None if another ``load`` superseded
        this one before its fetch resolved.

        Raises:
            DataUnavailable: If the store cannot provide bars. A stale
                failure is raised too; it never touches committed state.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._selected = symbol

        bars = self.store.fetch(symbol)
        feed = assemble_feed(bars, self.config)

        with self._lock:
            if generation != self._generation:
                logger.warning(
                    "Discarding stale feed for %s; %s is now selected",
                    symbol, self._selected,
                )
                return None
            self.symbol = symbol
            self.feed = feed
        return feed
