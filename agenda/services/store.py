import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from agenda.core.errors import StoreError

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(db: Session, action: str):
    """Roll back and raise ``StoreError`` when the block hits a database failure."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Database error while %s', action)
        raise StoreError(f'Database error while {action}') from exc
