"""
Catalog tables read by the recommender.

Stores, categories and products are owned by the catalog CRUD layer; the
recommender only queries them and bumps `Product.popularity`.
"""

from __future__ import annotations
from typing import Optional
from enum import Enum
from sqlmodel import SQLModel, Field


class Mode(str, Enum):
    SHOP = "shop"
    FOOD = "food"


class Store(SQLModel, table=True):
    __tablename__ = "stores"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    store_type: Mode = Mode.SHOP
    cuisine: Optional[str] = None


class Category(SQLModel, table=True):
    __tablename__ = "categories"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str


class Product(SQLModel, table=True):
    __tablename__ = "products"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    price: float = 0.0
    image_url: Optional[str] = None
    store_id: int = Field(foreign_key="stores.id", index=True)
    category_id: Optional[int] = Field(default=None, foreign_key="categories.id", index=True)
    product_type: Mode = Field(default=Mode.SHOP, index=True)
    cuisine: Optional[str] = Field(default=None, index=True)
    # NULL keeps the product out of popularity ranking until first counted
    popularity: Optional[int] = Field(default=None, index=True)
