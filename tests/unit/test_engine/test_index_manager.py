"""Tests for the index lifecycle manager."""

import pytest

from docsync.engine.enums import IndexState
from docsync.engine.index_manager import IndexManager
from docsync.engine.registry import MetadataRegistry
from docsync.exceptions import (
    IndexConflictError,
    IndexNotFoundError,
    IndexOperationError,
)
from tests.unit.fakes import INDEX_NAME, FakeSearchEngine


def make_manager(engine: FakeSearchEngine, registry: MetadataRegistry) -> IndexManager:
    return IndexManager(engine, INDEX_NAME, registry)  # type: ignore[arg-type]


class TestExists:
    @pytest.mark.asyncio
    async def test_absent(self, registry: MetadataRegistry) -> None:
        manager = make_manager(FakeSearchEngine(present=False), registry)

        assert await manager.exists() is False
        assert await manager.state() is IndexState.ABSENT

    @pytest.mark.asyncio
    async def test_present(self, registry: MetadataRegistry) -> None:
        manager = make_manager(FakeSearchEngine(present=True), registry)

        assert await manager.exists() is True
        assert await manager.state() is IndexState.PRESENT

    @pytest.mark.asyncio
    async def test_transport_failure(self, registry: MetadataRegistry) -> None:
        manager = make_manager(FakeSearchEngine(fail_on={"exists"}), registry)

        with pytest.raises(IndexOperationError) as exc_info:
            await manager.exists()

        assert exc_info.value.index_name == INDEX_NAME


class TestCreate:
    @pytest.mark.asyncio
    async def test_creates_with_merged_mappings(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine()
        manager = make_manager(engine, registry)

        assert await manager.create() is True

        assert engine.call_names == ["exists", "create", "exists"]
        assert engine.created_mappings == registry.mappings
        assert set(engine.created_mappings) == {"article", "comment", "post"}

    @pytest.mark.asyncio
    async def test_conflict_on_present_index(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True)
        manager = make_manager(engine, registry)

        with pytest.raises(IndexConflictError):
            await manager.create()

        assert engine.mutating_calls == []
        assert engine.created_mappings is None

    @pytest.mark.asyncio
    async def test_index_never_appears(self, registry: MetadataRegistry) -> None:
        manager = make_manager(FakeSearchEngine(create_succeeds=False), registry)

        with pytest.raises(IndexOperationError):
            await manager.create()

    @pytest.mark.asyncio
    async def test_create_request_fails(self, registry: MetadataRegistry) -> None:
        manager = make_manager(FakeSearchEngine(fail_on={"create"}), registry)

        with pytest.raises(IndexOperationError) as exc_info:
            await manager.create()

        assert "connection refused" in exc_info.value.message


class TestDrop:
    @pytest.mark.asyncio
    async def test_absent_is_a_no_op(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=False)

        assert await make_manager(engine, registry).drop() is True
        assert engine.mutating_calls == []

    @pytest.mark.asyncio
    async def test_deletes_and_verifies(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True)

        assert await make_manager(engine, registry).drop() is True
        assert engine.call_names == ["exists", "delete", "exists"]

    @pytest.mark.asyncio
    async def test_reports_failure_when_index_survives(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True, drop_succeeds=False)

        assert await make_manager(engine, registry).drop() is False

    @pytest.mark.asyncio
    async def test_delete_request_fails(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True, fail_on={"delete"})

        with pytest.raises(IndexOperationError):
            await make_manager(engine, registry).drop()


class TestRebuild:
    @pytest.mark.asyncio
    async def test_absent_index(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=False)

        with pytest.raises(IndexNotFoundError):
            await make_manager(engine, registry).rebuild()

        assert engine.mutating_calls == []

    @pytest.mark.asyncio
    async def test_drop_then_create(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True)

        assert await make_manager(engine, registry).rebuild() is True

        assert engine.mutating_calls == ["delete", "create"]
        assert engine.present is True

    @pytest.mark.asyncio
    async def test_failed_drop_aborts_before_create(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True, drop_succeeds=False)

        with pytest.raises(IndexOperationError):
            await make_manager(engine, registry).rebuild()

        assert engine.mutating_calls == ["delete"]


class TestRefresh:
    @pytest.mark.asyncio
    async def test_refresh(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True)

        await make_manager(engine, registry).refresh()

        assert engine.calls == [("refresh", INDEX_NAME)]
        assert engine.present is True

    @pytest.mark.asyncio
    async def test_refresh_fails(self, registry: MetadataRegistry) -> None:
        engine = FakeSearchEngine(present=True, fail_on={"refresh"})

        with pytest.raises(IndexOperationError):
            await make_manager(engine, registry).refresh()
