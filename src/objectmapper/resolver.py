"""
Dotted-path resolution over live object graphs.

Read side: walk ``a.b.c`` segment by segment, each resolved value becoming
the owner of the next segment, and hand back the final (owner, field) pair.

Write side: the same walk over every segment but the last, building any
intermediate that is currently None from its declared type and attaching it
before descending. Nothing is rolled back when a later segment fails.

Both sides raise ObjectMapperError subclasses; they never return partial
results.
"""
import logging
from typing import Any, List, Tuple

from objectmapper.construction import construct
from objectmapper.errors import AssignmentRejected, PropertyNotFound
from objectmapper.fields import FieldAccessor, find_field
from objectmapper.property_ref import PropertyRef

logger = logging.getLogger(__name__)


def split_path(path: str) -> List[str]:
    """Split a dotted path into its segments.

    Raises:
        PropertyNotFound: ``path`` is not a string, or has an empty segment.
    """
    if not isinstance(path, str):
        raise PropertyNotFound(repr(path), None, "not a dotted path")
    segments = path.split('.')
    for segment in segments:
        if not segment:
            raise PropertyNotFound(path, segment, "empty segment")
    return segments


def _lookup(owner: Any, segment: str, path: str) -> FieldAccessor:
    if owner is None:
        raise PropertyNotFound(path, segment, "owner is None")
    field_accessor = find_field(owner, segment)
    if field_accessor is None:
        raise PropertyNotFound(path, segment, f"no such property on {type(owner).__qualname__}")
    return field_accessor


def _read(field_accessor: FieldAccessor, owner: Any, segment: str, path: str) -> Any:
    try:
        return field_accessor.get(owner)
    except Exception as e:
        # properties and descriptors behind a field name may raise anything
        raise PropertyNotFound(path, segment, "unreadable") from e


def _assign(field_accessor: FieldAccessor, owner: Any, value: Any, path: str) -> None:
    try:
        field_accessor.set(owner, value)
    except Exception as e:
        raise AssignmentRejected(path, value) from e


def _walk(root: Any, path: str) -> Tuple[PropertyRef, Any]:
    owner = root
    field_accessor = None
    value = None
    for segment in split_path(path):
        if field_accessor is not None:
            # previous value owns the next segment
            owner = value
        field_accessor = _lookup(owner, segment, path)
        value = _read(field_accessor, owner, segment, path)
    return PropertyRef(owner, field_accessor), value


def resolve(root: Any, path: str) -> PropertyRef:
    """Resolve ``path`` against ``root`` to the slot it names."""
    ref, _ = _walk(root, path)
    return ref


def read(root: Any, path: str) -> Any:
    _, value = _walk(root, path)
    return value


def write(root: Any, path: str, value: Any) -> PropertyRef:
    """Assign ``value`` at ``path``, creating None intermediates on the way.

    Returns:
        The slot that received ``value``.

    Raises:
        PropertyNotFound: a segment names no field, or its value cannot be read.
        ConstructionFailed: a None intermediate could not be built.
        AssignmentRejected: the owner refused the write.
    """
    segments = split_path(path)
    owner = root
    for segment in segments[:-1]:
        field_accessor = _lookup(owner, segment, path)
        current = _read(field_accessor, owner, segment, path)
        if current is None:
            current = construct(field_accessor.declared_type, path, segment)
            _assign(field_accessor, owner, current, path)
            logger.debug(f"Auto-created {type(current).__qualname__} at {path}:{segment}")
        owner = current

    field_accessor = _lookup(owner, segments[-1], path)
    _assign(field_accessor, owner, value, path)
    return PropertyRef(owner, field_accessor)
