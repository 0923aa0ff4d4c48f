"""
Recommendation Service

Single entry point for tracking, recommending and clearing history. Every
operation is best-effort: storage failures are logged, the session is rolled
back and the caller gets ``False`` or an empty list instead of an exception.
"""

from __future__ import annotations
import time
from typing import Any, Dict, List, Optional, Union

from sqlmodel import Session

from config.settings import settings
from models.catalog import Mode, Product
from models.user_history import Action
from services.recommendation.candidate_selector import FoodSelector, HistorySelector, ShopSelector
from services.recommendation.catalog_repository import CatalogRepository
from services.recommendation.event_store import EventStore
from services.recommendation.history_manager import HistoryManager
from services.recommendation.popularity_counter import PopularityCounter
from utils.logger import setup_logger
from utils.prometheus_metrics import PrometheusMetrics, get_prometheus_metrics

logger = setup_logger(__name__)

ModeLike = Union[Mode, str]


def to_recommended_item(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "price": product.price,
        "image": product.image_url,
        "storeId": product.store_id,
    }


class RecommendationService:
    def __init__(
        self,
        db_session: Session,
        metrics: Optional[PrometheusMetrics] = None,
        shop_window: Optional[int] = None,
        food_window: Optional[int] = None,
    ):
        self.db_session = db_session
        self.metrics = metrics or get_prometheus_metrics()

        self.events = EventStore(db_session)
        self.popularity = PopularityCounter(db_session)
        self.history = HistoryManager(db_session)

        catalog = CatalogRepository(db_session)
        self.selectors: Dict[Mode, HistorySelector] = {
            Mode.SHOP: ShopSelector(self.events, catalog, shop_window or settings.SHOP_HISTORY_WINDOW),
            Mode.FOOD: FoodSelector(self.events, catalog, food_window or settings.FOOD_HISTORY_WINDOW),
        }

    def track(
        self,
        user_id: int,
        mode: ModeLike,
        item_id: int,
        store_id: int,
        action: Union[Action, str],
    ) -> bool:
        try:
            mode, action = Mode(mode), Action(action)

            self.events.append(user_id, mode, item_id, store_id, action)
            if PopularityCounter.qualifies(mode, action):
                self.popularity.increment(item_id)
            self.db_session.commit()
        except Exception:
            self._fail("track", user_id, mode=mode, item_id=item_id, action=action)
            return False

        self.metrics.record_tracked_event(mode.value, action.value)
        logger.info(
            "User action tracked",
            extra={"user_id": user_id, "mode": mode.value, "item_id": item_id, "action": action.value}
        )
        return True

    def recommend(self, user_id: int, mode: ModeLike = Mode.SHOP, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        limit = settings.DEFAULT_RECOMMENDATION_LIMIT if limit is None else limit
        start = time.time()
        try:
            mode = Mode(mode)
            selection = self.selectors[mode].select(user_id, limit)
        except Exception:
            self._fail("recommend", user_id, mode=mode, limit=limit)
            return []

        items = [to_recommended_item(p) for p in selection.items[:limit]]
        duration = time.time() - start
        self.metrics.record_recommendation(mode.value, selection.strategy, duration)
        logger.info(
            "Recommendations generated",
            extra={
                "user_id": user_id,
                "mode": mode.value,
                "strategy": selection.strategy,
                "count": len(items),
                "limit": limit,
                "duration_ms": round(duration * 1000, 2),
            }
        )
        return items

    def get_shop_recommendations(self, user_id: int, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return self.recommend(user_id, Mode.SHOP, limit)

    def get_food_recommendations(self, user_id: int, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        return self.recommend(user_id, Mode.FOOD, limit)

    def clear_history(self, user_id: int, mode: Optional[ModeLike] = None) -> bool:
        try:
            scope = Mode(mode) if mode is not None else None
            self.history.clear(user_id, scope)
            self.db_session.commit()
        except Exception:
            self._fail("clear_history", user_id, mode=mode)
            return False
        return True

    def _fail(self, operation: str, user_id: int, **context: Any) -> None:
        try:
            self.db_session.rollback()
        except Exception:
            logger.warning("Rollback failed", extra={"operation": operation}, exc_info=True)

        self.metrics.record_failure(operation)
        logger.error(
            f"Recommendation {operation} failed",
            extra={
                "operation": operation,
                "user_id": user_id,
                **{k: getattr(v, "value", v) for k, v in context.items()},
            },
            exc_info=True,
        )
