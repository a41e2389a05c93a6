from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable

from days.core.exceptions import ConflictError, InternalError

logger = logging.getLogger(__name__)


class SQLRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _commit(self, conflict_message: str, statement: Executable | None = None) -> None:
        """Run an optional write statement and commit; roll back on failure."""
        try:
            if statement is not None:
                await self.session.execute(statement)
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(conflict_message) from exc
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Database write failed", extra={"error": str(exc)})
            raise InternalError("Database write failed") from exc
