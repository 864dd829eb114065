"""Step registry for forward and backward migrations.

Each direction keeps a mapping from an origin version to the single step
leaving it. Registering a second step for the same origin and direction
replaces the first one.

Example usage:
    registry = StepRegistry()

    registry.register(1, 2, upgrade_v1, downgrade_v2)
    registry.register(2, 3, upgrade_v2)

    step = registry.next_step(Direction.FORWARD, 1)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from object_migrations.logging_config import create_logger
from object_migrations.versions import Version, VersionKey

logger = create_logger(__name__)

SyncMigration = Callable[[Any], Any]
AsyncMigration = Callable[[Any], Awaitable[Any]]
Migration = Union[SyncMigration, AsyncMigration]


class Direction(Enum):
    """Direction in which a migration walks the version chain."""

    FORWARD = "forward"
    BACKWARD = "backward"


@dataclass(frozen=True)
class Step:
    """A single registered hop to an adjacent version."""

    to: VersionKey
    migration: Migration

    def describe(self) -> str:
        """Describe the step."""
        name = getattr(self.migration, "__qualname__", repr(self.migration))
        return f"-> {self.to.label} via {name}"


class StepRegistry:
    """Registry of migration steps, one mapping per direction."""

    def __init__(self):
        self._steps: Dict[Direction, Dict[VersionKey, Step]] = {
            Direction.FORWARD: {},
            Direction.BACKWARD: {},
        }

    def register(
        self,
        from_version: Version,
        to_version: Version,
        forward: Migration,
        backward: Optional[Migration] = None,
    ) -> None:
        """Register the forward and optional backward migration between two versions.

        Args:
            from_version: Version the forward migration starts from
            to_version: Version the forward migration produces
            forward: Migration from ``from_version`` to ``to_version``
            backward: Migration from ``to_version`` back to ``from_version``
        """
        from_key = VersionKey.of(from_version)
        to_key = VersionKey.of(to_version)

        self._steps[Direction.FORWARD][from_key] = Step(to=to_key, migration=forward)
        logger.debug(f"Registered forward step {from_key.label} -> {to_key.label}")

        if backward is not None:
            self._steps[Direction.BACKWARD][to_key] = Step(to=from_key, migration=backward)
            logger.debug(f"Registered backward step {to_key.label} -> {from_key.label}")

    def next_step(self, direction: Direction, version: Version) -> Optional[Step]:
        """Get the step leaving a version in a direction, or None."""
        return self._steps[direction].get(VersionKey.of(version))

    def has_step(self, direction: Direction, version: Version) -> bool:
        """Check if a step leaves a version in a direction."""
        return VersionKey.of(version) in self._steps[direction]
