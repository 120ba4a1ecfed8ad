"""Generate database session"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from src.config.settings import settings
from src.db.schema import Base

engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
SessionLocal = sessionmaker(bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=bind)
