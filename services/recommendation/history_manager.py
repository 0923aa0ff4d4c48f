from typing import Optional
from sqlalchemy import delete, func
from sqlmodel import Session, select

from models.catalog import Mode
from models.user_history import UserHistory
from utils.logger import setup_logger

logger = setup_logger(__name__)


class HistoryManager:
    def __init__(self, db_session: Session):
        self.db_session = db_session

    def clear(self, user_id: int, mode: Optional[Mode] = None) -> int:
        """
        Delete the user's history, only for `mode` when given.
        Popularity counters are catalog-wide and stay untouched.
        """
        statement = delete(UserHistory).where(UserHistory.user_id == user_id)
        if mode is not None:
            statement = statement.where(UserHistory.mode == mode)

        deleted = self.db_session.execute(statement).rowcount

        logger.info(
            "User history cleared",
            extra={
                "user_id": user_id,
                "mode": mode.value if mode else "all",
                "deleted": deleted,
            }
        )
        return deleted

    def count(self, user_id: int, mode: Optional[Mode] = None) -> int:
        query = select(func.count()).select_from(UserHistory).where(UserHistory.user_id == user_id)
        if mode is not None:
            query = query.where(UserHistory.mode == mode)
        return self.db_session.exec(query).one()
