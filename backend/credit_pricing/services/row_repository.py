import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from credit_pricing.models.credit_rows import CreditRow
from credit_pricing.services.errors import IngestionError, StoreError

logger = logging.getLogger(__name__)


def insert_rows(db: Session, rows: list[dict]) -> int:
    """
    Insert all rows in one transaction. Either every row is stored or none is.
    """
    if not rows:
        return 0
    try:
        db.add_all([CreditRow(**row) for row in rows])
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Bulk insert of %s rows failed", len(rows))
        raise IngestionError(f"Failed to store rows: {exc}", status_code=500) from exc
    return len(rows)


def find_rows(db: Session, skip: int, limit: int) -> list[CreditRow]:
    try:
        return (
            db.query(CreditRow)
            .order_by(CreditRow.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to read rows: {exc}") from exc


def count_rows(db: Session) -> int:
    try:
        return int(db.query(func.count(CreditRow.id)).scalar() or 0)
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to count rows: {exc}") from exc


def get_all_rows(db: Session) -> list[CreditRow]:
    try:
        return db.query(CreditRow).order_by(CreditRow.id.asc()).all()
    except SQLAlchemyError as exc:
        raise StoreError(f"Failed to read rows: {exc}") from exc
