from typing import Optional
from uuid import uuid4

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from config.database import create_db_and_tables, enable_sqlite_foreign_keys
from models import Action, Category, Mode, Product, Store, User, UserHistory
from services.recommendation import EventStore


class CatalogFactory:
    def __init__(self, session: Session):
        self.session = session

    def _save(self, row):
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def user(self, email: Optional[str] = None) -> User:
        return self._save(User(email=email or f"user_{uuid4().hex[:8]}@test.com"))

    def store(self, name: str = "Store", store_type: Mode = Mode.SHOP, cuisine: Optional[str] = None) -> Store:
        return self._save(Store(name=name, store_type=store_type, cuisine=cuisine))

    def category(self, name: str = "Category") -> Category:
        return self._save(Category(name=name))

    def product(
        self,
        store: Store,
        name: Optional[str] = None,
        popularity: Optional[int] = None,
        category: Optional[Category] = None,
        cuisine: Optional[str] = None,
        product_type: Optional[Mode] = None,
        price: float = 9.99,
    ) -> Product:
        return self._save(Product(
            name=name or f"Product {uuid4().hex[:6]}",
            price=price,
            image_url=f"https://img.test/{uuid4().hex[:6]}.png",
            store_id=store.id,
            category_id=category.id if category else None,
            cuisine=cuisine,
            product_type=product_type or store.store_type,
            popularity=popularity,
        ))

    def event(self, user: User, product: Product, action: Action = Action.VIEW, mode: Optional[Mode] = None) -> UserHistory:
        row = EventStore(self.session).append(
            user.id, mode or product.product_type, product.id, product.store_id, action
        )
        self.session.commit()
        return row


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def factory(session):
    return CatalogFactory(session)
