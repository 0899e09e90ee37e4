"""Unit tests for IndexRegistry."""

import pytest

from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.model.value import IndexConfig, SearchConfig
from indexsync.domain.shared.error import NotSearchableError


class Post:
    pass


class Comment:
    pass


class Unregistered:
    pass


@pytest.fixture
def registry() -> IndexRegistry:
    return IndexRegistry(
        SearchConfig(
            prefix="app_",
            batch_size=2,
            indices=(
                IndexConfig(name="posts", entity=Post, index_if="is_published"),
                IndexConfig(name="comments", entity=Comment, enable_serializer_groups=True),
            ),
        )
    )


class TestIndexRegistry:
    """Tests for IndexRegistry lookups."""

    def test_registered_types_are_searchable(self, registry: IndexRegistry):
        assert registry.is_searchable(Post)
        assert registry.is_searchable(Comment)
        assert not registry.is_searchable(Unregistered)

    def test_searchable_types_keep_configuration_order(self, registry: IndexRegistry):
        assert registry.searchable_types == (Post, Comment)
        assert list(registry) == [Post, Comment]
        assert len(registry) == 2
        assert Post in registry

    def test_full_index_name_is_prefix_plus_configured_name(self, registry: IndexRegistry):
        assert registry.full_index_name(Post) == "app_posts"
        assert registry.full_index_name(Comment) == "app_comments"
        assert registry.index_name(Post) == "posts"

    def test_full_index_name_rejects_unregistered_type(self, registry: IndexRegistry):
        with pytest.raises(NotSearchableError, match="Unregistered is not searchable"):
            registry.full_index_name(Unregistered)

    def test_serializer_group_flag(self, registry: IndexRegistry):
        assert registry.uses_serializer_group(Comment) is True
        assert registry.uses_serializer_group(Post) is False

    def test_conditional_field_path(self, registry: IndexRegistry):
        assert registry.conditional_field_path(Post) == "is_published"
        assert registry.conditional_field_path(Comment) is None
        assert registry.conditional_field_path(Unregistered) is None

    def test_types_for_indices(self, registry: IndexRegistry):
        assert registry.types_for_indices(["comments"]) == [Comment]
        assert registry.types_for_indices(["comments", "missing"]) == [Comment]
        assert registry.types_for_indices([]) == [Post, Comment]
        assert registry.types_for_indices(None) == [Post, Comment]

    def test_empty_configuration(self):
        registry = IndexRegistry(SearchConfig())

        assert registry.searchable_types == ()
        assert not registry.is_searchable(Post)
