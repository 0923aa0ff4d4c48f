from typing import Optional
from sqlalchemy import func, update
from sqlmodel import Session

from models.catalog import Mode, Product
from models.user_history import Action

COUNTED_ACTIONS = frozenset({Action.VIEW, Action.ORDER})


class PopularityCounter:
    def __init__(self, db_session: Session):
        self.db_session = db_session

    @staticmethod
    def qualifies(mode: Mode, action: Action) -> bool:
        # only shop traffic feeds the counter; food popularity is read-only here
        return mode == Mode.SHOP and action in COUNTED_ACTIONS

    def increment(self, item_id: int) -> int:
        """Bump the counter by one, starting from 0 when NULL. Returns rows touched."""
        result = self.db_session.execute(
            update(Product)
            .where(Product.id == item_id)
            .values(popularity=func.coalesce(Product.popularity, 0) + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def get(self, item_id: int) -> Optional[int]:
        product = self.db_session.get(Product, item_id)
        if product is None:
            return None
        self.db_session.refresh(product)
        return product.popularity
