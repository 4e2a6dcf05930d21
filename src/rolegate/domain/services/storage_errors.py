"""Translation of datastore failures into domain errors."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from rolegate.core.logging import get_logger
from rolegate.domain.exceptions import ConflictError, ServiceError

logger = get_logger(__name__)


@asynccontextmanager
async def storage_errors(conflict_message: str | None = None) -> AsyncIterator[None]:
    """Translate datastore exceptions raised in the block into domain errors.

    Args:
        conflict_message: Message for the ``ConflictError`` raised when a
            constraint is violated. Without one, a violation is treated as a
            service failure.

    Raises:
        ConflictError: On a constraint violation when a message is given.
        ServiceError: On any other datastore, I/O or timeout failure. The
            underlying error is logged, never exposed.
    """
    try:
        yield
    except IntegrityError as e:
        if conflict_message is None:
            logger.error("Unexpected constraint violation", exc_info=True)
            raise ServiceError() from e
        logger.info("Constraint violation translated to conflict", error=str(e.orig))
        raise ConflictError(conflict_message) from e
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        logger.error("Storage operation failed", exc_info=True)
        raise ServiceError() from e
