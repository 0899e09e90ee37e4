"""Unit tests for EligibilityEvaluator and read_path."""

from dataclasses import dataclass, field
from typing import Any

import pytest

from indexsync.domain.index.model.registry import IndexRegistry
from indexsync.domain.index.model.value import IndexConfig, SearchConfig
from indexsync.domain.index.service.eligibility import EligibilityEvaluator, read_path
from indexsync.domain.shared.error import UnreadablePropertyError


@dataclass
class Author:
    active: bool


@dataclass
class Post:
    id: int
    is_published: Any = True
    author: Author | None = None
    extra: dict = field(default_factory=dict)

    @property
    def visible(self) -> bool:
        return bool(self.is_published) and self.author is not None

    def is_public(self) -> bool:
        return True

    @staticmethod
    def always() -> bool:
        return True


class PostProxy(Post):
    """Stand-in for a lazily loaded Post."""


@dataclass
class Page:
    id: int


@dataclass
class Draft:
    id: int


class FakeRecordProvider:
    """Resolves PostProxy instances to Post, like an ORM would."""

    def class_of(self, record: Any) -> type:
        return Post if isinstance(record, PostProxy) else type(record)


def make_evaluator(index_if: str | None = "is_published") -> EligibilityEvaluator:
    registry = IndexRegistry(
        SearchConfig(
            indices=(
                IndexConfig(name="posts", entity=Post, index_if=index_if),
                IndexConfig(name="pages", entity=Page),
            )
        )
    )
    return EligibilityEvaluator(registry, FakeRecordProvider())  # type: ignore[arg-type]


class TestReadPath:
    """Tests for the constrained property path reader."""

    def test_reads_attribute(self):
        assert read_path(Post(id=1, is_published=False), "is_published") is False

    def test_reads_property(self):
        assert read_path(Post(id=1, author=Author(active=True)), "visible") is True

    def test_reads_nested_attribute(self):
        assert read_path(Post(id=1, author=Author(active=False)), "author.active") is False

    def test_reads_mapping_keys(self):
        assert read_path(Post(id=1, extra={"flags": {"listed": 1}}), "extra.flags.listed") == 1

    def test_missing_attribute_is_unreadable(self):
        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1), "missing")

    def test_missing_key_is_unreadable(self):
        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1), "extra.missing")

    def test_none_in_the_middle_is_unreadable(self):
        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1, author=None), "author.active")

    def test_methods_are_not_called(self):
        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1), "is_public")

    def test_static_methods_are_not_called(self):
        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1), "always")

    def test_functions_in_mappings_are_not_called(self):
        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1, extra={"check": len}), "extra.check")

        with pytest.raises(UnreadablePropertyError):
            read_path(Post(id=1, extra={"check": lambda: True}), "extra.check")


class TestEligibilityEvaluator:
    """Tests for EligibilityEvaluator."""

    def test_condition_true(self):
        assert make_evaluator().is_eligible(Post(id=1, is_published=True))

    def test_condition_false(self):
        assert not make_evaluator().is_eligible(Post(id=1, is_published=False))

    def test_condition_value_is_coerced_to_bool(self):
        evaluator = make_evaluator()

        assert evaluator.is_eligible(Post(id=1, is_published="yes"))
        assert not evaluator.is_eligible(Post(id=1, is_published=0))
        assert not evaluator.is_eligible(Post(id=1, is_published=None))

    def test_unconditional_type_is_always_eligible(self):
        assert make_evaluator().is_eligible(Page(id=1))

    def test_unregistered_type_is_never_eligible(self):
        assert not make_evaluator().is_eligible(Draft(id=1))

    def test_unreadable_path_fails_closed(self):
        evaluator = make_evaluator(index_if="author.active")

        assert not evaluator.is_eligible(Post(id=1, author=None))
        assert evaluator.is_eligible(Post(id=1, author=Author(active=True)))

    def test_callable_condition_fails_closed(self):
        assert not make_evaluator(index_if="always").is_eligible(Post(id=1))

    def test_proxy_resolves_to_underlying_type(self):
        evaluator = make_evaluator()

        assert not evaluator.is_eligible(PostProxy(id=1, is_published=False))
        assert evaluator.is_eligible(PostProxy(id=2, is_published=True))
