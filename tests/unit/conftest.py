"""Shared fixtures for the unit tests."""

import pytest

from docsync.engine.context import SyncContext
from docsync.engine.registry import MetadataRegistry
from docsync.models.source import InMemoryRecordSource
from tests.unit.fakes import INDEX_NAME, FakeSearchEngine
from tests.unit.sample_records import Article, Comment, Post, post_mapping


@pytest.fixture
def registry() -> MetadataRegistry:
    registry = MetadataRegistry()
    registry.register(Article)
    registry.register(Comment)
    registry.register(Post, post_mapping())
    return registry


@pytest.fixture
def engine() -> FakeSearchEngine:
    return FakeSearchEngine()


@pytest.fixture
def article() -> Article:
    return Article(
        id="1",
        attributes={"title": "Hi", "body": "World"},
        embedded={
            "comments": [
                Comment(id="c1", attributes={"text": "Nice"}),
                Comment(id="c2", attributes={"text": "Agreed"}),
            ]
        },
    )


@pytest.fixture
def source(article: Article) -> InMemoryRecordSource:
    return InMemoryRecordSource(
        [
            article,
            Article(id="2", attributes={"title": "Second", "body": "Post"}),
            Post(id="p1", attributes={"title": "Hello There"}),
        ]
    )


@pytest.fixture
def context(
    registry: MetadataRegistry, source: InMemoryRecordSource, engine: FakeSearchEngine
) -> SyncContext:
    return SyncContext(registry, source, engine, INDEX_NAME)  # type: ignore[arg-type]
