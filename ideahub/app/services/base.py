"""Shared plumbing for services backed by the database session."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ideahub.app.core.exceptions import StoreError

logger = logging.getLogger(__name__)


class StoreService:
    """
    Base class for services that talk to the store through one AsyncSession.

    Every store call goes through ``_execute`` or ``_commit`` so that driver
    failures surface as ``StoreError`` with the store's own message and the
    session is left rolled back.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _execute(self, statement: Any, operation: str):
        try:
            return await self.db.execute(statement)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[STORE] {operation} failed: {e}")
            raise StoreError(operation, e)

    async def _commit(self, operation: str) -> None:
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"[STORE] {operation} failed: {e}")
            raise StoreError(operation, e)
