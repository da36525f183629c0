import contextlib
import logging
from typing import Optional

from sqlalchemy.orm import sessionmaker

from database.database import SessionLocal
from database.repositories.match import MatchRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def match_uow(session_factory: Optional[sessionmaker] = None):
    """Per-unit-of-work transaction scope.

    Yields a MatchRepository bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with match_uow() as repo:
            repo.upsert_matches(job_id, records)
        # commit happens automatically on successful exit
    """
    session = (session_factory or SessionLocal)()
    try:
        repo = MatchRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
