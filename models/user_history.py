"""
User History Model

Append-only log of shop/food actions. Rows are never updated; they are
removed only by an explicit history clear or when the owning user is deleted.
"""

from __future__ import annotations
from typing import Optional
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlmodel import SQLModel, Field

from models.catalog import Mode
from models.user import utc_now


class Action(str, Enum):
    VIEW = "view"
    SEARCH = "search"
    ORDER = "order"


class UserHistory(SQLModel, table=True):
    __tablename__ = "user_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(
        sa_column=Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    mode: Mode = Field(index=True)
    item_id: int
    store_id: int
    action: Action
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True), nullable=False, index=True)
