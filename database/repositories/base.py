from sqlalchemy.orm import Session


class BaseRepository:
    """Gives repositories their session; the unit of work owns commit and rollback."""

    def __init__(self, db: Session):
        self.db = db

    def flush(self) -> None:
        self.db.flush()
