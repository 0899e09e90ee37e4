"""Object ID encoding for record identities."""

from collections.abc import Mapping, Sequence
from typing import Any

from indexsync.domain.shared.error import InvalidObjectIdError, MissingIdentityError

COMPOSITE_SEPARATOR = "__"
KEY_VALUE_SEPARATOR = "-"


def format_object_id(identity: Mapping[str, Any]) -> str:
    """Encode identity values as a backend object ID.

    A single identity value is used as is. Composite identities are encoded as
    ``key1-value1__key2-value2`` in mapping order.

    Raises:
        MissingIdentityError: If the identity has no values.
    """
    if not identity:
        raise MissingIdentityError("Record has no identity values")
    if len(identity) == 1:
        return str(next(iter(identity.values())))
    return COMPOSITE_SEPARATOR.join(
        f"{key}{KEY_VALUE_SEPARATOR}{value}" for key, value in identity.items()
    )


def parse_object_id(object_id: str, keys: Sequence[str]) -> dict[str, str]:
    """Decode an object ID produced by format_object_id.

    Args:
        object_id: Encoded object ID.
        keys: Identity keys of the record type, in order.

    Returns:
        Mapping of identity key to its (string) value.

    Raises:
        InvalidObjectIdError: If a composite ID does not match ``keys``.
    """
    if len(keys) == 1:
        return {keys[0]: object_id}

    values: dict[str, str] = {}
    for part in object_id.split(COMPOSITE_SEPARATOR):
        key, sep, value = part.partition(KEY_VALUE_SEPARATOR)
        if not sep:
            raise InvalidObjectIdError(f"Malformed composite object ID '{object_id}'")
        values[key] = value
    if set(values) != set(keys):
        raise InvalidObjectIdError(
            f"Object ID '{object_id}' does not match identity keys {list(keys)}"
        )
    return {key: values[key] for key in keys}
