from dishka import AsyncContainer, Provider, from_context, make_async_container

from indexsync.config import Config
from indexsync.infrastructure.index.di import IndexProvider
from indexsync.infrastructure.persistence.di import PersistenceProvider
from indexsync.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars and the YAML file at runtime
    config = config or Config()

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        IndexProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
