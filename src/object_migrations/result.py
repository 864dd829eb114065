"""Results returned by the migrator."""

from dataclasses import dataclass, field
from typing import Any, Generic, Tuple, TypeVar

from object_migrations.registry import Direction, Step
from object_migrations.versions import VersionKey

T = TypeVar("T")


@dataclass(frozen=True)
class Migrated(Generic[T]):
    """Result of a successful migration.

    Attributes:
        value: The migrated object
        changed: False if the object was already at the requested version,
            in which case ``value`` is the initial object itself
    """

    value: T
    changed: bool


@dataclass
class MigrationPlan:
    """Steps that a migration between two versions would run."""

    from_version: Any
    to_version: Any
    direction: Direction
    steps: Tuple[Step, ...] = field(default_factory=tuple)

    def describe(self) -> str:
        """Generate human-readable description of the plan."""
        lines = [
            f"Migration Plan ({self.direction.value})",
            f"From version {VersionKey.of(self.from_version)} "
            f"to {VersionKey.of(self.to_version)}",
            f"Steps ({len(self.steps)}):"
        ]
        for i, step in enumerate(self.steps, 1):
            lines.append(f"  {i}. {step.describe()}")

        return "\n".join(lines)
