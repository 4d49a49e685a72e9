# rebound/models/__init__.py
from rebound.db.session import Base, engine

# Import model modules so SQLAlchemy registers all mappers.
from . import profile  # noqa: F401
from . import analysis_event  # noqa: F401


def init_db() -> None:
    """Create tables if they don't exist."""
    Base.metadata.create_all(bind=engine)
