"""
Unit of Work Pattern - one session + transaction per booking attempt

Architecture:
- UoW owns the session lifecycle (acquired on enter, released on exit)
- UoW owns commit/rollback; leaving the block without commit rolls back
- Repositories receive the shared session from the UoW
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

import anyio
from sqlalchemy.ext.asyncio import AsyncSession


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow:
            booking_id = await uow.booking_command_repo.create_booking(...)
            await uow.commit()
    """

    booking_command_repo: IBookingCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory
        self.session: Optional[AsyncSession] = None
        self._session_cm: Optional[AsyncContextManager[AsyncSession]] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.cinema.driven_adapter.repo.booking_command_repo_impl import (
            BookingCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()
        self.booking_command_repo = BookingCommandRepoImpl(session=self.session)
        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        # Shielded: a timed-out booking must still roll back and release its connection
        with anyio.CancelScope(shield=True):
            try:
                await super().__aexit__(*args)
            finally:
                session_cm, self._session_cm, self.session = self._session_cm, None, None
                if session_cm is not None:
                    await session_cm.__aexit__(*args)

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside its async with block')
        await self.session.commit()

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
