from datetime import datetime, timezone
from typing import List
from sqlmodel import Session, select

from models.catalog import Mode
from models.user_history import Action, UserHistory
from utils.logger import setup_logger

logger = setup_logger(__name__)


class EventStore:
    """Append-only access to the ``user_history`` log."""

    def __init__(self, db_session: Session):
        self.db_session = db_session

    def append(
        self,
        user_id: int,
        mode: Mode,
        item_id: int,
        store_id: int,
        action: Action,
    ) -> UserHistory:
        event = UserHistory(
            user_id=user_id,
            mode=mode,
            item_id=item_id,
            store_id=store_id,
            action=action,
            created_at=datetime.now(timezone.utc),
        )
        self.db_session.add(event)
        self.db_session.flush()

        logger.debug(
            "User action appended",
            extra={
                "user_id": user_id,
                "mode": mode.value,
                "item_id": item_id,
                "action": action.value,
            }
        )
        return event

    def recent(self, user_id: int, mode: Mode, window: int) -> List[UserHistory]:
        """Newest first; id breaks ties between equal timestamps."""
        if window <= 0:
            return []

        return list(self.db_session.exec(
            select(UserHistory)
            .where(UserHistory.user_id == user_id)
            .where(UserHistory.mode == mode)
            .order_by(UserHistory.created_at.desc(), UserHistory.id.desc())
            .limit(window)
        ).all())
