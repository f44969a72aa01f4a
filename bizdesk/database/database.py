from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from bizdesk.core.config import settings
import logging

logger = logging.getLogger(__name__)

engine_options = {
    "pool_pre_ping": True,
    "echo": settings.DEBUG,
}

if settings.database_url.startswith("sqlite"):
    # Single shared connection so in-memory databases survive across sessions
    engine_options.update(
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    engine_options.update(pool_size=10, max_overflow=20)

sync_engine = create_engine(settings.database_url, **engine_options)

if sync_engine.dialect.name == "sqlite":
    @event.listens_for(sync_engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores ON DELETE clauses unless enabled per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=sync_engine)

Base = declarative_base()


def get_db():
    """Genera una sesión de base de datos por request."""
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def get_owned_query(session, model, user_id):
    """Helper para consultas restringidas al dueño del registro"""
    return session.query(model).filter(model.user_id == user_id)
