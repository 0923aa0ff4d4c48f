"""
Candidate Selectors

Both modes share one template:

    recent history -> affinity keys (category | cuisine)
                   -> popularity-ranked query over seen stores
                   -> exclude already-seen items

A user with no history in the mode gets the plain popularity list. Food mode
also tops a short list up with popular items from restaurants the user has
not visited recently; shop mode returns a short list as is.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from models.catalog import Mode, Product
from models.user_history import UserHistory
from services.recommendation.catalog_repository import CatalogRepository, distinct_values
from services.recommendation.event_store import EventStore
from utils.logger import setup_logger

logger = setup_logger(__name__)

STRATEGY_POPULAR = "popular_fallback"
STRATEGY_HISTORY = "history"
STRATEGY_TOP_UP = "history_top_up"


@dataclass
class Selection:
    items: List[Product] = field(default_factory=list)
    strategy: str = STRATEGY_POPULAR


@dataclass
class HistorySignal:
    store_ids: List[int]
    item_ids: List[int]
    affinity: list


class HistorySelector:
    mode: Mode
    history_window: int
    product_type: Optional[Mode] = None
    top_up: bool = False

    def __init__(self, events: EventStore, catalog: CatalogRepository, history_window: Optional[int] = None):
        self.events = events
        self.catalog = catalog
        if history_window is not None:
            self.history_window = history_window

    def select(self, user_id: int, limit: int) -> Selection:
        recent = self.events.recent(user_id, self.mode, self.history_window)

        if not recent:
            return Selection(
                items=self.catalog.popular(limit, product_type=self.product_type),
                strategy=STRATEGY_POPULAR,
            )

        signal = self._signal(recent)
        matched = self._matched(signal, limit)

        if not self.top_up or len(matched) >= limit:
            return Selection(items=matched[:limit], strategy=STRATEGY_HISTORY)

        extra = self.catalog.popular(
            limit - len(matched),
            product_type=self.product_type,
            exclude_ids=signal.item_ids + [p.id for p in matched],
            exclude_store_ids=signal.store_ids,
        )
        logger.debug(
            "Recommendation list topped up",
            extra={
                "user_id": user_id,
                "mode": self.mode.value,
                "matched": len(matched),
                "top_up": len(extra),
            }
        )
        return Selection(items=(matched + extra)[:limit], strategy=STRATEGY_TOP_UP)

    def _signal(self, recent: Sequence[UserHistory]) -> HistorySignal:
        item_ids = [e.item_id for e in recent if e.item_id]
        return HistorySignal(
            store_ids=distinct_values(e.store_id for e in recent if e.store_id),
            item_ids=item_ids,
            affinity=self.affinity_keys(item_ids),
        )

    def affinity_keys(self, item_ids: Sequence[int]) -> list:
        raise NotImplementedError

    def _matched(self, signal: HistorySignal, limit: int) -> List[Product]:
        raise NotImplementedError


class ShopSelector(HistorySelector):
    mode = Mode.SHOP
    history_window = 5

    def affinity_keys(self, item_ids: Sequence[int]) -> List[int]:
        return self.catalog.categories_of(item_ids)

    def _matched(self, signal: HistorySignal, limit: int) -> List[Product]:
        return self.catalog.popular(
            limit,
            store_ids=signal.store_ids,
            category_ids=signal.affinity,
            exclude_ids=signal.item_ids,
        )


class FoodSelector(HistorySelector):
    mode = Mode.FOOD
    history_window = 20
    product_type = Mode.FOOD
    top_up = True

    def affinity_keys(self, item_ids: Sequence[int]) -> List[str]:
        return self.catalog.cuisines_of(item_ids)

    def _matched(self, signal: HistorySignal, limit: int) -> List[Product]:
        if not signal.affinity:
            return []
        return self.catalog.popular(
            limit,
            product_type=self.product_type,
            store_ids=signal.store_ids,
            cuisines=signal.affinity,
            exclude_ids=signal.item_ids,
        )
