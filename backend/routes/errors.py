import logging

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

DATABASE_ERROR_DETAIL = 'Database error. Please try again later.'


def database_error(exc: SQLAlchemyError) -> HTTPException:
    logger.error('Database operation failed', exc_info=exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=DATABASE_ERROR_DETAIL,
    )
