from typing import Iterable, List, Optional, Sequence
from sqlmodel import Session, select

from models.catalog import Mode, Product


def distinct_values(values: Iterable) -> List:
    seen = set()
    out = []
    for value in values:
        if value is None or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


class CatalogRepository:
    """Read side of the catalog as seen by the candidate selectors."""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def categories_of(self, item_ids: Sequence[int]) -> List[int]:
        if not item_ids:
            return []
        rows = self.db_session.exec(
            select(Product.category_id)
            .where(Product.id.in_(distinct_values(item_ids)))
            .where(Product.category_id.is_not(None))
            .order_by(Product.category_id)
        ).all()
        return distinct_values(rows)

    def cuisines_of(self, item_ids: Sequence[int]) -> List[str]:
        if not item_ids:
            return []
        rows = self.db_session.exec(
            select(Product.cuisine)
            .where(Product.id.in_(distinct_values(item_ids)))
            .where(Product.cuisine.is_not(None))
            .order_by(Product.cuisine)
        ).all()
        return distinct_values(rows)

    def popular(
        self,
        limit: int,
        *,
        product_type: Optional[Mode] = None,
        store_ids: Optional[Sequence[int]] = None,
        exclude_store_ids: Optional[Sequence[int]] = None,
        category_ids: Optional[Sequence[int]] = None,
        cuisines: Optional[Sequence[str]] = None,
        exclude_ids: Optional[Sequence[int]] = None,
    ) -> List[Product]:
        """
        Products with a popularity value, most popular first.

        Restrictions passed as empty sequences match nothing; exclusions
        passed as empty sequences exclude nothing.
        """
        if limit <= 0:
            return []
        for restriction in (store_ids, category_ids, cuisines):
            if restriction is not None and len(restriction) == 0:
                return []

        query = select(Product).where(Product.popularity.is_not(None))

        if product_type is not None:
            query = query.where(Product.product_type == product_type)
        if store_ids is not None:
            query = query.where(Product.store_id.in_(distinct_values(store_ids)))
        if category_ids is not None:
            query = query.where(Product.category_id.in_(distinct_values(category_ids)))
        if cuisines is not None:
            query = query.where(Product.cuisine.in_(distinct_values(cuisines)))
        if exclude_store_ids:
            query = query.where(Product.store_id.not_in(distinct_values(exclude_store_ids)))
        if exclude_ids:
            query = query.where(Product.id.not_in(distinct_values(exclude_ids)))

        query = query.order_by(Product.popularity.desc(), Product.id.asc()).limit(limit)
        return list(self.db_session.exec(query).all())
