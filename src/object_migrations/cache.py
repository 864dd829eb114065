"""Cache of resolved step chains."""

from typing import Dict, Optional, Tuple

from object_migrations.registry import Step
from object_migrations.versions import Version, VersionKey

StepChain = Tuple[Step, ...]


class StepCache:
    """Resolved step chains keyed by ``from`` and then ``to``.

    Only complete chains are stored. One cache serves one direction.
    """

    def __init__(self):
        self._chains: Dict[VersionKey, Dict[VersionKey, StepChain]] = {}

    def get(self, from_version: Version, to_version: Version) -> Optional[StepChain]:
        """Get the cached chain between two versions, or None if not cached yet."""
        to_map = self._chains.get(VersionKey.of(from_version))
        if to_map is None:
            return None
        return to_map.get(VersionKey.of(to_version))

    def put(self, from_version: Version, to_version: Version, steps: StepChain) -> None:
        """Cache the chain between two versions.

        Raises:
            ValueError: If ``steps`` is empty
        """
        if not steps:
            raise ValueError("There must be at least 1 step to be cached.")

        to_map = self._chains.setdefault(VersionKey.of(from_version), {})
        to_map[VersionKey.of(to_version)] = tuple(steps)

    def contains(self, from_version: Version, to_version: Version) -> bool:
        return self.get(from_version, to_version) is not None

    def __len__(self) -> int:
        return sum(len(to_map) for to_map in self._chains.values())
