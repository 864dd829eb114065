"""In-memory version migrations for data objects.

Register single-step migrations between adjacent versions, then migrate
objects forward or backward across any number of versions, synchronously
or asynchronously.
"""

from object_migrations.cache import StepCache
from object_migrations.exceptions import (
    ConfigurationError,
    MigrationError,
    MigratorError,
    NoMigrationStepsError,
)
from object_migrations.migrator import Migrator
from object_migrations.registry import (
    AsyncMigration,
    Direction,
    Migration,
    Step,
    StepRegistry,
    SyncMigration,
)
from object_migrations.resolver import StepResolver
from object_migrations.result import Migrated, MigrationPlan
from object_migrations.versions import Version, VersionKey, VersionKind

__version__ = "1.0.0"

__all__ = [
    "AsyncMigration",
    "ConfigurationError",
    "Direction",
    "Migrated",
    "Migration",
    "MigrationError",
    "MigrationPlan",
    "Migrator",
    "MigratorError",
    "NoMigrationStepsError",
    "Step",
    "StepCache",
    "StepRegistry",
    "StepResolver",
    "SyncMigration",
    "Version",
    "VersionKey",
    "VersionKind",
]
