from services.recommendation.event_store import EventStore
from services.recommendation.popularity_counter import PopularityCounter
from services.recommendation.catalog_repository import CatalogRepository
from services.recommendation.candidate_selector import (
    HistorySelector,
    ShopSelector,
    FoodSelector,
    Selection,
)
from services.recommendation.history_manager import HistoryManager
from services.recommendation.recommendation_service import RecommendationService, to_recommended_item

__all__ = [
    "EventStore",
    "PopularityCounter",
    "CatalogRepository",
    "HistorySelector",
    "ShopSelector",
    "FoodSelector",
    "Selection",
    "HistoryManager",
    "RecommendationService",
    "to_recommended_item",
]
