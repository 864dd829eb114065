"""Version identifiers.

A version is any hashable value (``1``, ``"v2"``, an Enum member) or a
class standing in for the shape of its instances. Both are wrapped in a
:class:`VersionKey` before they reach the registry, so the graph engine
never has to care where an identifier came from.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable, Union


class VersionKind(Enum):
    """What a version identifier denotes."""

    VALUE = "value"  # Plain data value (number, string, enum member, ...)
    TYPE = "type"    # Class used as a type tag


@dataclass(frozen=True)
class VersionKey:
    """Tagged version identifier used as a node key in the step graph.

    Two keys denote the same version iff they have the same kind and
    their values compare equal. Classes compare by identity.
    """

    kind: VersionKind
    value: Hashable

    @classmethod
    def of(cls, version: "Version") -> "VersionKey":
        """Wrap a raw version identifier.

        Args:
            version: Raw identifier or an existing key (returned as is)

        Returns:
            VersionKey for the identifier

        Raises:
            TypeError: If the identifier is not hashable
        """
        if isinstance(version, VersionKey):
            return version
        if isinstance(version, type):
            return cls(VersionKind.TYPE, version)
        hash(version)
        return cls(VersionKind.VALUE, version)

    @property
    def label(self) -> str:
        """Human-readable label for logs and descriptions."""
        if self.kind is VersionKind.TYPE:
            return self.value.__name__
        return repr(self.value)

    def __str__(self) -> str:
        return self.label


Version = Union[Hashable, type, VersionKey]


def version_of(obj: Any) -> type:
    """Return the type tag of an object, used when only a target class is given."""
    return type(obj)
