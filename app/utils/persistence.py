# app/utils/persistence.py
import logging
from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

def commit_or_500(db: Session, failure_message: str):
    """Commit the session; on a database error roll back and answer 500"""
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception(failure_message)
        raise HTTPException(status_code=500, detail=failure_message)
