"""
Field discovery and raw field access.

A field is an annotated name (or a ``__slots__`` entry) declared in a class
body. FieldAccessor is the single place that reads and writes those slots
behind the back of the object's own attribute hooks:

- reads go through ``object.__getattribute__`` (no ``__getattr__`` fallbacks,
  no lazy resolution)
- writes go through ``object.__setattr__`` (works on frozen dataclasses)
- private ``__name`` fields are reachable under their source spelling
"""
import dataclasses
import inspect
import logging
import sys
import types
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

_SLOT_INTERNALS = ('__dict__', '__weakref__')


def _mangle(cls: type, name: str) -> str:
    """Return the storage name Python uses for ``name`` inside ``cls``'s body."""
    if not name.startswith('__') or name.endswith('__'):
        return name
    stripped = cls.__name__.lstrip('_')
    return f'_{stripped}{name}' if stripped else name


def _demangle(cls: type, attribute: str) -> str:
    stripped = cls.__name__.lstrip('_')
    prefix = f'_{stripped}__'
    if stripped and attribute.startswith(prefix) and not attribute.endswith('__'):
        return attribute[len(prefix) - 2:]
    return attribute


def _own_annotations(cls: type) -> Dict[str, Any]:
    """Annotations written in ``cls``'s own body, forward references resolved.

    Each annotation is evaluated on its own, so one name that only exists
    under ``TYPE_CHECKING`` leaves just that field unresolved.
    """
    module = sys.modules.get(cls.__module__)
    module_namespace = vars(module) if module is not None else {}
    class_namespace = dict(vars(cls))
    return {
        attribute: _resolve_annotation(cls, attribute, annotation, class_namespace, module_namespace)
        for attribute, annotation in inspect.get_annotations(cls).items()
    }


def _resolve_annotation(
    cls: type,
    attribute: str,
    annotation: Any,
    class_namespace: Dict[str, Any],
    module_namespace: Dict[str, Any],
) -> Any:
    holder = type(cls.__name__, (), {'__annotations__': {attribute: annotation}})
    try:
        # module names shadow class attributes, as in get_type_hints(cls)
        return get_type_hints(holder, globalns=class_namespace, localns=module_namespace)[attribute]
    except (NameError, AttributeError, SyntaxError, TypeError) as e:
        # Unresolvable forward reference: keep it raw, it just won't count
        # as a class.
        logger.debug(f"Keeping raw annotation for {cls.__qualname__}.{attribute}: {e}")
        return annotation


def _is_pseudo_field(annotation: Any) -> bool:
    if annotation is ClassVar or get_origin(annotation) is ClassVar:
        return True
    if annotation is dataclasses.InitVar or isinstance(annotation, dataclasses.InitVar):
        return True
    if isinstance(annotation, str):
        return annotation.startswith(('ClassVar', 'typing.ClassVar', 'InitVar', 'dataclasses.InitVar'))
    return False


def declared_class(annotation: Any) -> Optional[type]:
    """Reduce an annotation to the class a value of it is built from.

    ``Optional[X]`` and ``X | None`` become ``X``. Generic aliases, unions of
    several classes, ``Any`` and unresolved strings give None.
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) != 1:
            return None
        annotation = members[0]
        origin = get_origin(annotation)
    if origin is not None:
        return None
    return annotation if isinstance(annotation, type) else None


@dataclass(frozen=True)
class FieldAccessor:
    """Handle on one field of one class."""
    name: str
    attribute: str
    owner_type: type
    annotation: Any = None

    @property
    def declared_type(self) -> Optional[type]:
        return declared_class(self.annotation)

    def matches(self, segment: str) -> bool:
        return segment == self.name or segment == self.attribute

    def get(self, instance: Any) -> Any:
        """Read the raw value; a declared but never assigned field reads as None."""
        try:
            return object.__getattribute__(instance, self.attribute)
        except AttributeError:
            return None

    def set(self, instance: Any, value: Any) -> None:
        object.__setattr__(instance, self.attribute, value)


def declared_fields(cls: type) -> List[FieldAccessor]:
    """Fields declared directly on ``cls`` (inherited ones excluded), in source order."""
    result = []
    seen = set()
    for attribute, annotation in _own_annotations(cls).items():
        if _is_pseudo_field(annotation):
            continue
        result.append(FieldAccessor(_demangle(cls, attribute), attribute, cls, annotation))
        seen.add(attribute)

    slots = vars(cls).get('__slots__', ())
    if isinstance(slots, str):
        slots = (slots,)
    for slot in slots:
        attribute = _mangle(cls, slot)
        if slot in _SLOT_INTERNALS or attribute in seen:
            continue
        result.append(FieldAccessor(slot, attribute, cls))
        seen.add(attribute)
    return result


def find_field(owner: Any, segment: str) -> Optional[FieldAccessor]:
    """Find the field ``segment`` on ``owner``'s runtime type.

    The whole MRO is searched, most derived class first, so inherited fields
    resolve. An attribute stored on the instance without any declaration is
    returned as an untyped field. Returns None when nothing matches.
    """
    owner_type = type(owner)
    for cls in owner_type.__mro__:
        for field_accessor in declared_fields(cls):
            if field_accessor.matches(segment):
                return field_accessor

    if segment in _instance_dict(owner):
        return FieldAccessor(segment, segment, owner_type)
    return None


def undeclared_fields(instance: Any) -> List[FieldAccessor]:
    """Untyped fields for attributes stored on ``instance`` that no class in its MRO declares."""
    owner_type = type(instance)
    declared = {
        field_accessor.attribute
        for cls in owner_type.__mro__
        for field_accessor in declared_fields(cls)
    }
    return [
        FieldAccessor(attribute, attribute, owner_type)
        for attribute in _instance_dict(instance)
        if isinstance(attribute, str) and attribute not in declared
    ]


def _instance_dict(instance: Any) -> Dict[str, Any]:
    try:
        return object.__getattribute__(instance, '__dict__')
    except AttributeError:
        return {}
