"""Tests for the dependency injection container wiring."""

from collections import OrderedDict
from pathlib import Path

import pytest

from indexsync.application.di import create_container
from indexsync.config import Config, DatabaseConfig, SettingsConfig
from indexsync.domain.index.model.value import IndexConfig, SearchConfig
from indexsync.domain.index.service.importer import RecordImporter
from indexsync.domain.index.service.index import IndexService
from indexsync.infrastructure.algolia import AlgoliaSearchBackend
from indexsync.infrastructure.persistence.provider import SqlAlchemyRecordProvider
from indexsync.infrastructure.settings import SettingsManager


def make_config(tmp_path: Path) -> Config:
    return Config(
        search=SearchConfig(
            prefix="test_",
            batch_size=50,
            indices=(IndexConfig(name="ordered", entity=OrderedDict),),
        ),
        database=DatabaseConfig(url="sqlite+aiosqlite:///:memory:"),
        settings=SettingsConfig(directory=tmp_path),
    )


class TestContainer:
    """Tests for create_container."""

    @pytest.mark.asyncio
    async def test_resolves_index_service_per_unit_of_work(self, tmp_path: Path) -> None:
        # Arrange
        container = create_container(make_config(tmp_path))

        # Act
        try:
            async with container() as uow:
                service = await uow.get(IndexService)
                importer = await uow.get(RecordImporter)
        finally:
            await container.close()

        # Assert
        assert service.full_index_name(OrderedDict) == "test_ordered"
        assert service.dispatcher.batch_size == 50
        assert isinstance(service.backend, AlgoliaSearchBackend)
        assert isinstance(service.records, SqlAlchemyRecordProvider)
        assert importer.service is service

    @pytest.mark.asyncio
    async def test_units_of_work_share_app_scoped_services(self, tmp_path: Path) -> None:
        container = create_container(make_config(tmp_path))

        try:
            async with container() as first:
                first_service = await first.get(IndexService)
            async with container() as second:
                second_service = await second.get(IndexService)
            manager = await container.get(SettingsManager)
        finally:
            await container.close()

        assert first_service is not second_service
        assert first_service.registry is second_service.registry
        assert first_service.backend is second_service.backend
        assert manager.settings_file("ordered") == tmp_path / "ordered-settings.json"
