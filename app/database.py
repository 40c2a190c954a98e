# app/database.py
"""
Database connection, session management, and table creation.
Uses SQLAlchemy with PostgreSQL (SQLite works for local runs and tests).
All models are auto-imported here so create_tables() creates every table in one call.
"""

from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from app.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,   # Auto-reconnect if DB connection drops
        "pool_size": 10,
        "max_overflow": 20,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=False,                  # Set True to log all SQL queries (debug only)
    **_engine_kwargs(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency: yields a DB session and closes it after request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(db: Session):
    """
    Wraps one service operation: commits once on success, rolls back on any error.
    Services flush inside the block so later queries see earlier writes.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert(db: Session, model, values: dict, conflict_cols: list, update_cols: list):
    """
    Single-statement INSERT ... ON CONFLICT DO UPDATE keyed on a unique constraint.
    Concurrent writers of the same key never raise IntegrityError; the last one wins.
    With no update_cols an existing row is left untouched (ON CONFLICT DO NOTHING)
    and the returned result has rowcount 0.
    """
    dialect = db.get_bind().dialect.name
    if dialect not in _DIALECT_INSERTS:
        raise NotImplementedError(f"No native upsert for database dialect '{dialect}'")
    stmt = _DIALECT_INSERTS[dialect](model).values(**values)
    if update_cols:
        stmt = stmt.on_conflict_do_update(
            index_elements=conflict_cols,
            set_={col: stmt.excluded[col] for col in update_cols},
        )
    else:
        stmt = stmt.on_conflict_do_nothing(index_elements=conflict_cols)
    return db.execute(stmt)


def create_tables(bind=None):
    """
    Creates all DB tables on startup. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.site import Site                        # noqa
    from app.models.tariff import Tariff                    # noqa
    from app.models.vehicle import Vehicle                  # noqa
    from app.models.ticket import Ticket, TicketExit        # noqa
    from app.models.user import User                        # noqa
    from app.models.contract import Contract                # noqa
    from app.models.contract_alert import ContractAlert     # noqa

    Base.metadata.create_all(bind=bind or engine)
