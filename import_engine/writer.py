"""
import_engine.writer - All-or-nothing batch insert.

Each record is flushed on its own so a constraint violation surfaces
at the offending row; any failure rolls back the whole batch.
sqlite3 raises a bare OverflowError for integers past 64 bits, so it
counts as a store failure too.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from import_engine.errors import PersistenceFailure

logger = logging.getLogger(__name__)


def write_batch(session: Session, model: type, records: Sequence) -> int:
    """
    Insert `records` as `model` rows inside one transaction.
    Returns the number inserted; raises PersistenceFailure after rollback.
    """
    table = model.__tablename__
    try:
        for idx, record in enumerate(records, start=1):
            session.add(model(**record.to_dict()))
            try:
                session.flush()
            except (SQLAlchemyError, OverflowError) as exc:
                logger.error(f"Insert {idx}/{len(records)} into {table} failed: {exc}")
                raise
        session.commit()
    except (SQLAlchemyError, OverflowError) as exc:
        session.rollback()
        logger.error(f"Rolled back {len(records)}-row batch for {table}")
        raise PersistenceFailure(f"Failed to import {table}") from exc

    return len(records)
