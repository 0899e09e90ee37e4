"""Service base class shared by the indexing and import services."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform(kw_only_default=True)
class _CollaboratorsMeta(type):
    """Makes every Service subclass a keyword-only dataclass of its collaborators."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        service_cls = super().__new__(mcs, name, bases, namespace)
        if not any(isinstance(base, mcs) for base in bases):
            return service_cls
        return dataclass(service_cls, kw_only=True, eq=False)


class Service(metaclass=_CollaboratorsMeta):
    """Base class for services wired from their collaborators by keyword.

    Two services are equal only if they are the same instance.
    """
