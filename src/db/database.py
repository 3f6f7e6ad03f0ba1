"""Generate database session"""

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import Settings, get_settings
from src.db.schema import Base


def create_db_engine(settings: Settings | None = None) -> Engine:
    """
    Engine for the configured database URL.

    NOTE an in-memory SQLite database only lives as long as its connection, so all sessions share a single one (StaticPool).
    """
    settings = settings or get_settings()
    if settings.database_url.startswith("sqlite"):
        engine = create_engine(
            settings.database_url,
            echo=settings.echo_sql,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(settings.database_url, echo=settings.echo_sql)

    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autoflush=False, bind=engine)
