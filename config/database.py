from sqlalchemy import event
from sqlmodel import create_engine, Session, SQLModel
from .settings import settings


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    connect_args={"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {},
)


def enable_sqlite_foreign_keys(target_engine) -> None:
    # ON DELETE CASCADE from users to user_history needs this on sqlite
    if target_engine.dialect.name != "sqlite":
        return

    @event.listens_for(target_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(engine)


def create_db_and_tables(target_engine=None):
    import models  # noqa: F401  register tables on the metadata

    SQLModel.metadata.create_all(target_engine or engine)


def get_session():
    with Session(engine) as session:
        yield session
