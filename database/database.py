import os
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from database.models import Base

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///resume_ranker.db")

engine = create_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind or engine)


def make_session_factory(url: str, create_tables: bool = True) -> sessionmaker:
    """Build a session factory for a database other than the module default."""
    bind = create_engine(url)
    if create_tables:
        init_db(bind)
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)
