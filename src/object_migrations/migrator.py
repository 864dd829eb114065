"""Migrator for versioned in-memory objects.

This module ties the registry, resolver and executor together:
- Registration of forward and backward steps between adjacent versions
- Chain resolution with per-direction caching
- Synchronous and asynchronous execution of a chain
- Wrapping of step failures in MigrationError

Example usage:
    migrator = Migrator()

    migrator.register(1, 2, upgrade_v1, downgrade_v2)
    migrator.register(2, 3, upgrade_v2, downgrade_v3)

    # Explicit versions
    result = migrator.forward(v1_config, 1, 3)
    if result.changed:
        save(result.value)

    # Classes as versions: the source version is the object's own class
    migrator.register(SettingsV1, SettingsV2, to_v2, to_v1)
    result = migrator.forward(SettingsV1(), SettingsV2)

    # Steps that await something
    result = await migrator.backward_async(v3_config, 3, 1)
"""

import inspect
from typing import Any, Optional, Tuple

from object_migrations.cache import StepChain
from object_migrations.exceptions import MigrationError
from object_migrations.logging_config import create_logger, log_exception
from object_migrations.registry import Direction, Migration, Step, StepRegistry
from object_migrations.resolver import StepResolver
from object_migrations.result import Migrated, MigrationPlan
from object_migrations.versions import Version, VersionKey, version_of

logger = create_logger(__name__)

_MISSING = object()


def resolve_call_versions(
    obj: Any,
    from_version_or_to_class: Version,
    to_version: Any = _MISSING
) -> Tuple[Version, Version]:
    """Turn the two call shapes into an explicit ``(from, to)`` pair.

    ``(obj, from, to)`` is used as is. ``(obj, to_class)`` takes the
    source version from the object's own class.
    """
    if to_version is not _MISSING:
        return from_version_or_to_class, to_version
    return version_of(obj), from_version_or_to_class


class Migrator:
    """Register migrations between object versions and migrate objects forward and backward.

    Registration is expected to be complete before the first migration.
    Registry and cache state belong to this instance only.
    """

    def __init__(
        self,
        registry: Optional[StepRegistry] = None,
        resolver: Optional[StepResolver] = None
    ):
        """Initialize the migrator.

        Args:
            registry: StepRegistry instance. If None, creates an empty one.
            resolver: StepResolver instance. If None, creates one over ``registry``.
                If given, its registry is the one registrations go into.

        Raises:
            ValueError: If ``registry`` is not the registry ``resolver`` walks
        """
        if resolver is None:
            self.registry = registry or StepRegistry()
            self.resolver = StepResolver(self.registry)
        else:
            if registry is not None and registry is not resolver.registry:
                raise ValueError("registry must be the registry used by resolver")
            self.registry = resolver.registry
            self.resolver = resolver

    def register(
        self,
        from_version: Version,
        to_version: Version,
        forward: Migration,
        backward: Optional[Migration] = None
    ) -> None:
        """Register the forward and optional backward migrations between two successive versions.

        Versions are hashable values (numbers, strings, enum members) or
        classes. Migrations may be plain functions or coroutine functions;
        :meth:`forward` and :meth:`backward` only run plain ones, while
        :meth:`forward_async` and :meth:`backward_async` run both.

        Registering again for the same origin replaces the earlier step.
        Chains already cached are not recomputed.
        """
        self.registry.register(from_version, to_version, forward, backward)

    def forward(self, obj: Any, from_version_or_to_class: Version, to_version: Any = _MISSING) -> Migrated:
        """Migrate an object forward between two versions.

        Call as ``forward(obj, from_version, to_version)``, or as
        ``forward(obj, ToClass)`` when classes were registered as versions.
        Returns the same object unchanged if it is already at the target
        version.

        Raises:
            NoMigrationStepsError: If no forward chain connects the versions
            MigrationError: If a step fails
        """
        from_version, to_version = resolve_call_versions(obj, from_version_or_to_class, to_version)
        return self.migrate(obj, from_version, to_version, Direction.FORWARD)

    def backward(self, obj: Any, from_version_or_to_class: Version, to_version: Any = _MISSING) -> Migrated:
        """Migrate an object backward between two versions. See :meth:`forward`."""
        from_version, to_version = resolve_call_versions(obj, from_version_or_to_class, to_version)
        return self.migrate(obj, from_version, to_version, Direction.BACKWARD)

    async def forward_async(
        self,
        obj: Any,
        from_version_or_to_class: Version,
        to_version: Any = _MISSING
    ) -> Migrated:
        """Asynchronously migrate an object forward. Supports sync and async steps."""
        from_version, to_version = resolve_call_versions(obj, from_version_or_to_class, to_version)
        return await self.migrate_async(obj, from_version, to_version, Direction.FORWARD)

    async def backward_async(
        self,
        obj: Any,
        from_version_or_to_class: Version,
        to_version: Any = _MISSING
    ) -> Migrated:
        """Asynchronously migrate an object backward. Supports sync and async steps."""
        from_version, to_version = resolve_call_versions(obj, from_version_or_to_class, to_version)
        return await self.migrate_async(obj, from_version, to_version, Direction.BACKWARD)

    def migrate(
        self,
        obj: Any,
        from_version: Version,
        to_version: Version,
        direction: Direction
    ) -> Migrated:
        """Run the chain between two versions synchronously.

        Only correct when every step of the chain is non-suspending; an
        async step fails the migration with a TypeError cause.
        """
        if VersionKey.of(from_version) == VersionKey.of(to_version):
            return Migrated(value=obj, changed=False)

        steps = self.resolver.resolve(from_version, to_version, direction)
        self._log_start(from_version, to_version, direction, steps)

        migrated = obj
        for i, step in enumerate(steps, 1):
            try:
                migrated = self._run_sync(step, migrated)
            except Exception as e:
                raise self._step_failed(from_version, to_version, direction, i, len(steps), e) from e

        return Migrated(value=migrated, changed=True)

    async def migrate_async(
        self,
        obj: Any,
        from_version: Version,
        to_version: Version,
        direction: Direction
    ) -> Migrated:
        """Run the chain between two versions, awaiting each step that returns an awaitable."""
        if VersionKey.of(from_version) == VersionKey.of(to_version):
            return Migrated(value=obj, changed=False)

        steps = self.resolver.resolve(from_version, to_version, direction)
        self._log_start(from_version, to_version, direction, steps)

        migrated = obj
        for i, step in enumerate(steps, 1):
            try:
                result = step.migration(migrated)
                if inspect.isawaitable(result):
                    result = await result
                migrated = result
            except Exception as e:
                raise self._step_failed(from_version, to_version, direction, i, len(steps), e) from e

        return Migrated(value=migrated, changed=True)

    def plan(
        self,
        from_version: Version,
        to_version: Version,
        direction: Direction = Direction.FORWARD
    ) -> MigrationPlan:
        """Resolve the steps between two versions without running them.

        Raises:
            NoMigrationStepsError: If no chain connects the versions
        """
        if VersionKey.of(from_version) == VersionKey.of(to_version):
            return MigrationPlan(from_version, to_version, direction)

        steps = self.resolver.resolve(from_version, to_version, direction)
        return MigrationPlan(from_version, to_version, direction, steps)

    def is_cached(
        self,
        from_version: Version,
        to_version: Version,
        direction: Direction = Direction.FORWARD
    ) -> bool:
        """Check if the chain between two versions has already been resolved."""
        return self.resolver.is_cached(from_version, to_version, direction)

    @staticmethod
    def _run_sync(step: Step, value: Any) -> Any:
        if inspect.iscoroutinefunction(step.migration):
            raise TypeError(
                f"Step {step.describe()} is asynchronous; "
                f"use forward_async() or backward_async()"
            )

        result = step.migration(value)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError(
                f"Step {step.describe()} returned an awaitable; "
                f"use forward_async() or backward_async()"
            )
        return result

    @staticmethod
    def _log_start(
        from_version: Version,
        to_version: Version,
        direction: Direction,
        steps: StepChain
    ) -> None:
        logger.debug(
            f"Migrating {direction.value} {VersionKey.of(from_version)} -> "
            f"{VersionKey.of(to_version)} in {len(steps)} step(s)"
        )

    @staticmethod
    def _step_failed(
        from_version: Version,
        to_version: Version,
        direction: Direction,
        index: int,
        total: int,
        cause: Exception
    ) -> MigrationError:
        error = MigrationError(from_version, to_version, cause)
        logger.error(f"✗ Step {index}/{total} failed")
        log_exception(logger, cause, context=f"{direction.value} migration")
        return error
