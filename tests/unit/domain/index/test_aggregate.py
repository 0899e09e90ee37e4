"""Unit tests for Aggregator and AggregateResolver."""

from dataclasses import dataclass

import pytest

from indexsync.domain.index.model.aggregate import Aggregator, is_aggregator
from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.model.value import IndexConfig, SearchConfig
from indexsync.domain.index.service.aggregate import AggregateResolver
from indexsync.domain.shared.error import (
    InvalidObjectIdError,
    MissingIdentityError,
    NotSearchableError,
)


@dataclass
class Post:
    id: int


@dataclass
class Comment:
    id: int


@dataclass
class Tag:
    id: int


class ContentAggregator(Aggregator):
    entities = (Post, Comment)


class FeedAggregator(Aggregator):
    entities = (Post,)


class UnregisteredAggregator(Aggregator):
    entities = (Tag,)


def make_resolver() -> AggregateResolver:
    registry = IndexRegistry(
        SearchConfig(
            indices=(
                IndexConfig(name="posts", entity=Post),
                IndexConfig(name="content", entity=ContentAggregator),
                IndexConfig(name="feed", entity=FeedAggregator),
            )
        )
    )
    return AggregateResolver(registry)


class TestAggregator:
    """Tests for aggregate object IDs."""

    def test_object_id_combines_type_name_and_first_identity_value(self):
        aggregate = ContentAggregator.from_record(Post(id=7), Post, {"id": 7})

        assert aggregate.object_id == "Post::7"
        assert aggregate.record == Post(id=7)
        assert aggregate.record_type is Post

    def test_composite_identity_uses_first_value(self):
        aggregate = ContentAggregator.from_record(Post(id=7), Post, {"id": 7, "lang": "en"})

        assert aggregate.object_id == "Post::7"

    def test_empty_identity_is_rejected(self):
        with pytest.raises(MissingIdentityError):
            ContentAggregator.from_record(Post(id=7), Post, {})

    def test_decomposes_object_id(self):
        assert ContentAggregator.entity_class_from_object_id("Comment::12") is Comment
        assert ContentAggregator.entity_id_from_object_id("Comment::12") == "12"

    def test_unknown_type_in_object_id(self):
        with pytest.raises(InvalidObjectIdError):
            ContentAggregator.entity_class_from_object_id("Tag::1")

    def test_object_id_without_separator(self):
        with pytest.raises(InvalidObjectIdError):
            ContentAggregator.entity_class_from_object_id("12")
        with pytest.raises(InvalidObjectIdError):
            ContentAggregator.entity_id_from_object_id("12")

    def test_is_aggregator(self):
        assert is_aggregator(ContentAggregator)
        assert not is_aggregator(Post)
        assert not is_aggregator(Post(id=1))  # type: ignore[arg-type]


class TestAggregateResolver:
    """Tests for AggregateResolver."""

    def test_knows_registered_aggregates_only(self):
        resolver = make_resolver()

        assert resolver.aggregate_types == (ContentAggregator, FeedAggregator)
        assert resolver.is_aggregate(ContentAggregator)
        assert not resolver.is_aggregate(UnregisteredAggregator)
        assert not resolver.is_aggregate(Post)

    def test_record_type_fans_out_to_every_aggregate(self):
        resolver = make_resolver()

        assert resolver.aggregate_types_for(Post) == (ContentAggregator, FeedAggregator)
        assert resolver.aggregate_types_for(Comment) == (ContentAggregator,)

    def test_record_type_without_aggregate(self):
        resolver = make_resolver()

        assert resolver.aggregate_types_for(Tag) == ()

    def test_build_aggregate(self):
        resolver = make_resolver()
        comment = Comment(id=3)

        aggregate = resolver.build_aggregate(ContentAggregator, comment, Comment, {"id": 3})

        assert isinstance(aggregate, ContentAggregator)
        assert aggregate.record is comment
        assert aggregate.object_id == "Comment::3"

    def test_build_unregistered_aggregate_fails(self):
        resolver = make_resolver()

        with pytest.raises(NotSearchableError):
            resolver.build_aggregate(UnregisteredAggregator, Tag(id=1), Tag, {"id": 1})
