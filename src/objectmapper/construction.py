"""
Building missing intermediate objects during writes.

``construct`` calls the registered factory for a type if there is one, else
the type's zero-argument constructor. Register a factory for types whose
constructor needs arguments.
"""
import logging
from typing import Any, Callable, Dict, Optional

from objectmapper.errors import ConstructionFailed

logger = logging.getLogger(__name__)

# Exact type -> zero-argument factory
_factory_registry: Dict[type, Callable[[], Any]] = {}


def register_factory(target_type: type, factory: Callable[[], Any]) -> None:
    """Use ``factory()`` instead of ``target_type()`` when vivifying ``target_type``."""
    _factory_registry[target_type] = factory


def unregister_factory(target_type: type) -> None:
    _factory_registry.pop(target_type, None)


def get_factory(target_type: type) -> Optional[Callable[[], Any]]:
    return _factory_registry.get(target_type)


def clear_factories() -> None:
    _factory_registry.clear()


def construct(target_type: Optional[type], path: str, segment: str) -> Any:
    """Create a fresh instance of ``target_type`` for ``segment`` of ``path``.

    Raises:
        ConstructionFailed: no usable class, or the factory/constructor raised.
    """
    if not isinstance(target_type, type):
        raise ConstructionFailed(path, segment, target_type)

    factory = _factory_registry.get(target_type, target_type)
    try:
        instance = factory()
    except Exception as e:
        raise ConstructionFailed(path, segment, target_type) from e

    logger.debug(f"Constructed {target_type.__qualname__} for {path}:{segment}")
    return instance
