"""Versioned test objects and prebuilt migrators shared by the tests.

Every migration appends the version it produces to ``sequence``, so the
order in which steps ran can be read back from the result.
"""

import asyncio
from typing import Any, Callable, Dict, List, Type

from object_migrations import Migrator


class StepFailure(Exception):
    """Error with an arbitrary payload, raised from test steps."""

    def __init__(self, payload: Any = None):
        super().__init__("StepFailure")
        self.payload = payload


# ============================================================================
# Classes as versions
# ============================================================================

class Shape:
    """Base class of the class-tagged versions."""

    version = 0

    def __init__(self):
        self.sequence: List[int] = [self.version]


class ShapeV1(Shape):
    version = 1


class ShapeV2(Shape):
    version = 2


class ShapeV3(Shape):
    version = 3


class ShapeV4(Shape):
    version = 4


class ShapeV5(Shape):
    version = 5


SHAPES: List[Type[Shape]] = [ShapeV1, ShapeV2, ShapeV3, ShapeV4, ShapeV5]


# ============================================================================
# Plain objects
# ============================================================================

def make_obj(version: int) -> Dict[str, Any]:
    """Create a plain versioned object."""
    return {"version": version, "sequence": [version]}


def shape_step(to_class: Type[Shape]) -> Callable[[Shape], Shape]:
    def migrate(obj: Shape) -> Shape:
        result = to_class()
        result.sequence = [*obj.sequence, result.version]
        return result

    return migrate


def async_shape_step(to_class: Type[Shape]) -> Callable:
    async def migrate(obj: Shape) -> Shape:
        await asyncio.sleep(0)
        result = to_class()
        result.sequence = [*obj.sequence, result.version]
        return result

    return migrate


def obj_step(to_version: int) -> Callable[[Dict[str, Any]], Dict[str, Any]]:
    def migrate(obj: Dict[str, Any]) -> Dict[str, Any]:
        return {"version": to_version, "sequence": [*obj["sequence"], to_version]}

    return migrate


def async_obj_step(to_version: int) -> Callable:
    async def migrate(obj: Dict[str, Any]) -> Dict[str, Any]:
        await asyncio.sleep(0)
        return {"version": to_version, "sequence": [*obj["sequence"], to_version]}

    return migrate


def make_sync_migrator() -> Migrator:
    """Migrator with synchronous steps between versions 1 through 5, both as classes and numbers."""
    m = Migrator()

    for from_class, to_class in zip(SHAPES, SHAPES[1:]):
        m.register(from_class, to_class, shape_step(to_class), shape_step(from_class))

    for version in range(1, 5):
        m.register(version, version + 1, obj_step(version + 1), obj_step(version))

    return m


def make_async_migrator() -> Migrator:
    """Like make_sync_migrator(), but every step is a coroutine function."""
    m = Migrator()

    for from_class, to_class in zip(SHAPES, SHAPES[1:]):
        m.register(from_class, to_class, async_shape_step(to_class), async_shape_step(from_class))

    for version in range(1, 5):
        m.register(version, version + 1, async_obj_step(version + 1), async_obj_step(version))

    return m
