"""Step chain resolution.

Walks a direction's registry from ``from`` to ``to`` and memoizes the
result per direction.

Assuming versions 1 through 4 are registered and an object is migrated
from 1 to 4, the resolved chain is ``(1->2, 2->3, 3->4)``. Only the single
chain of registered adjacent steps is followed; there is no search for
alternative or shorter paths.
"""

from typing import Dict, List, Optional, Set

from object_migrations.cache import StepCache, StepChain
from object_migrations.exceptions import NoMigrationStepsError
from object_migrations.logging_config import create_logger
from object_migrations.registry import Direction, Step, StepRegistry
from object_migrations.versions import Version, VersionKey

logger = create_logger(__name__)


class StepResolver:
    """Resolve and cache step chains against a registry."""

    def __init__(
        self,
        registry: StepRegistry,
        caches: Optional[Dict[Direction, StepCache]] = None
    ):
        """Initialize the resolver.

        Args:
            registry: Registry to walk
            caches: Cache per direction. If None, creates empty ones.

        Raises:
            ValueError: If ``caches`` lacks a cache for a direction
        """
        if caches is None:
            caches = {direction: StepCache() for direction in Direction}

        missing = [direction.value for direction in Direction if direction not in caches]
        if missing:
            raise ValueError(f"Missing step cache for direction(s): {', '.join(missing)}")

        self.registry = registry
        self.caches = caches

    def resolve(
        self,
        from_version: Version,
        to_version: Version,
        direction: Direction
    ) -> StepChain:
        """Get the chain from one version to another, computing it on a cache miss.

        Args:
            from_version: Starting version
            to_version: Target version
            direction: Registry direction to walk

        Returns:
            Ordered, non-empty tuple of steps

        Raises:
            NoMigrationStepsError: If no chain connects the versions
        """
        cache = self.caches[direction]

        steps = cache.get(from_version, to_version)
        if steps is not None:
            logger.debug(
                f"Using cached {direction.value} steps "
                f"{VersionKey.of(from_version)} -> {VersionKey.of(to_version)}"
            )
            return steps

        steps = self.compute_steps(from_version, to_version, direction)
        cache.put(from_version, to_version, steps)
        return steps

    def compute_steps(
        self,
        from_version: Version,
        to_version: Version,
        direction: Direction
    ) -> StepChain:
        """Compute the chain from one version to another without consulting the cache.

        Raises:
            NoMigrationStepsError: If there is no first step, the chain
                dead-ends, or it loops back without reaching the target
        """
        target = VersionKey.of(to_version)
        steps: List[Step] = []
        visited: Set[VersionKey] = {VersionKey.of(from_version)}

        # Append the next step, starting at `from`, until (and including)
        # the step that results in `to`.
        step = self.registry.next_step(direction, from_version)
        if step is None:
            raise NoMigrationStepsError(from_version, to_version)

        while step is not None:
            steps.append(step)
            if step.to == target:
                break
            if step.to in visited:
                break
            visited.add(step.to)
            step = self.registry.next_step(direction, step.to)

        if not steps or steps[-1].to != target:
            raise NoMigrationStepsError(from_version, to_version)

        logger.debug(
            f"Computed {len(steps)} {direction.value} step(s) "
            f"{VersionKey.of(from_version)} -> {target}"
        )
        return tuple(steps)

    def is_cached(
        self,
        from_version: Version,
        to_version: Version,
        direction: Direction
    ) -> bool:
        """Check if the chain between two versions is already cached."""
        return self.caches[direction].contains(from_version, to_version)

    def cached_steps(
        self,
        from_version: Version,
        to_version: Version,
        direction: Direction
    ) -> Optional[StepChain]:
        """Get the cached chain between two versions, or None."""
        return self.caches[direction].get(from_version, to_version)
