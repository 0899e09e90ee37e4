"""Dependency injection provider for record persistence."""

from typing import AsyncIterable

from dishka import Provider, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from indexsync.config import Config
from indexsync.domain.index.port.persistence import RecordProvider
from indexsync.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from indexsync.infrastructure.persistence.provider import SqlAlchemyRecordProvider
from indexsync.util.di.scope import Scope


class PersistenceProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # Indexing never writes records, so the session is closed without commit
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session

    @provide(scope=Scope.UOW)
    def get_record_provider(self, session: AsyncSession) -> RecordProvider:
        return SqlAlchemyRecordProvider(session)
