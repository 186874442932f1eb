"""Load transactions for the dashboard and track the load state.

A dashboard refreshes on two uncoordinated triggers, the initial load and
every refocus. Each refresh reads the store, aggregates, and publishes the
result to subscribers. Refreshes are numbered; a refresh that finishes after
a newer one has started is dropped, so the newest snapshot always wins.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Union

from .aggregator import aggregate
from .locales import DEFAULT_LOCALE, LocaleConfig
from .models import HighlightSummary, NormalizedTransaction
from .store import TransactionStore


@dataclass(frozen=True)
class Pending:
    """No load has completed yet."""


@dataclass(frozen=True)
class Loaded:
    """Transactions and highlights from the latest load (possibly empty)."""

    transactions: list[NormalizedTransaction]
    highlights: HighlightSummary


@dataclass(frozen=True)
class Failed:
    """The latest load failed; call Dashboard.retry() to try again."""

    error: Exception


LoadState = Union[Pending, Loaded, Failed]


class Dashboard:
    """Keep the highlight cards of one user up to date."""

    def __init__(
        self,
        store: TransactionStore,
        user_id: str,
        locale: LocaleConfig = DEFAULT_LOCALE,
    ):
        self.store = store
        self.user_id = user_id
        self.locale = locale
        self.state: LoadState = Pending()
        self._generation = 0
        self._lock = threading.Lock()
        # Held while delivering, so subscribers see states in publish order.
        self._publish_lock = threading.RLock()
        self._subscribers: list[Callable[[LoadState], None]] = []

    def subscribe(self, callback: Callable[[LoadState], None]) -> None:
        """Register a callback receiving every published state."""
        self._subscribers.append(callback)

    def on_load(self) -> LoadState:
        return self.refresh()

    def on_focus(self) -> LoadState:
        return self.refresh()

    def retry(self) -> LoadState:
        return self.refresh()

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def _publish(self, generation: int, state: LoadState) -> bool:
        with self._publish_lock:
            with self._lock:
                if generation != self._generation:
                    return False
                self.state = state
            for callback in self._subscribers:
                # A callback may have started a newer refresh.
                if not self._is_current(generation):
                    break
                callback(state)
        return True

    def refresh(self) -> LoadState:
        """Read the store, aggregate and publish.

        Returns:
            The current state after this refresh. If a newer refresh started
            while this one was running, its state is left untouched.
        """
        generation = self._begin()
        try:
            raw = self.store.get(self.user_id)
            transactions, highlights = aggregate(raw, self.locale)
            state: LoadState = Loaded(transactions, highlights)
        except Exception as e:
            state = Failed(e)

        self._publish(generation, state)
        return self.state
