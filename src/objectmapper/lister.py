"""
Recursive enumeration of property paths.

Given a class, every field is expanded through its declared type. Given an
instance, a field holding a value is expanded through that value (so a
subclass instance shows its extra fields), and a None field falls back to
its declared type. Attributes an instance carries without any declaration
are listed after its declared fields. The bases of whatever type was
expanded are walked under the same prefix, which is how fields inherited
through a field's type show up.

Expansion stops at types whose fully-qualified name matches an ignore
pattern. By default that is everything in ``builtins`` and the standard
library, so ``int``, ``str``, ``datetime`` and friends are leaves.
The default matches on the top-level module name only, so a project package
that shares a name with a standard-library module (``platform``, ``queue``,
``types``, ...) is treated as standard library too and its types are leaves.
Pass an explicit ignore list to list through such packages.

A class being expanded statically, or an object being expanded by value, is
not expanded a second time on the same branch. Self-referencing types
therefore terminate; the path that would have recursed is still listed.
"""
import logging
import re
import sys
from typing import Any, FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from objectmapper.fields import declared_fields, undeclared_fields

logger = logging.getLogger(__name__)

IgnorePattern = Union[str, re.Pattern]

_STDLIB_NAMESPACE = '|'.join(re.escape(name) for name in sorted(sys.stdlib_module_names | {'builtins'}))

DEFAULT_IGNORED_TYPES: Tuple[str, ...] = (rf'(?:{_STDLIB_NAMESPACE})\..+',)


def default_ignore_list() -> List[IgnorePattern]:
    """Fresh, caller-owned copy of the default ignore patterns."""
    return list(DEFAULT_IGNORED_TYPES)


def qualified_name(cls: type) -> str:
    return f'{cls.__module__}.{cls.__qualname__}'


def is_ignored(cls: type, patterns: Iterable[IgnorePattern]) -> bool:
    """True if any pattern matches the whole of ``cls``'s qualified name."""
    name = qualified_name(cls)
    return any(re.fullmatch(pattern, name) for pattern in patterns)


def list_properties(
    subject: Any,
    prefix: Optional[str] = None,
    ignore: Optional[Sequence[IgnorePattern]] = None,
) -> List[str]:
    """List every dotted path reachable from ``subject``.

    Args:
        subject: A class (static listing) or an instance (listing by value).
        prefix: Prepended to every path with a dot; None or "" for no prefix.
        ignore: Patterns of types not to expand; None for the defaults.

    Returns:
        Paths in discovery order. Each field precedes its children. A path
        reachable through several bases is listed once per base.
    """
    patterns = DEFAULT_IGNORED_TYPES if ignore is None else tuple(ignore)
    return _list(subject, prefix, patterns, frozenset(), frozenset())


def _list(
    subject: Any,
    prefix: Optional[str],
    patterns: Tuple[IgnorePattern, ...],
    classes_on_branch: FrozenSet[type],
    objects_on_branch: FrozenSet[int],
) -> List[str]:
    paths: List[str] = []
    if subject is None:
        return paths

    subject_is_class = isinstance(subject, type)
    if subject_is_class:
        working_type = subject
        classes_on_branch = classes_on_branch | {subject}
    else:
        working_type = type(subject)
        objects_on_branch = objects_on_branch | {id(subject)}

    fields = declared_fields(working_type)
    if not subject_is_class:
        fields += undeclared_fields(subject)

    for field_accessor in fields:
        path = f'{prefix}.{field_accessor.name}' if prefix else field_accessor.name
        paths.append(path)

        target_type = field_accessor.declared_type
        value = None
        if not subject_is_class:
            try:
                value = field_accessor.get(subject)
            except Exception as e:
                logger.debug(f"Unreadable {path}, listing by declared type: {e}")
            if value is not None:
                target_type = type(value)

        if target_type is None or is_ignored(target_type, patterns):
            continue

        if value is not None:
            if id(value) in objects_on_branch:
                logger.debug(f"Not re-entering object already listed at {path}")
            else:
                paths.extend(_list(value, path, patterns, classes_on_branch, objects_on_branch))
        elif target_type in classes_on_branch:
            logger.debug(f"Not re-entering {target_type.__qualname__} at {path}")
        else:
            paths.extend(_list(target_type, path, patterns, classes_on_branch, objects_on_branch))

        for base in target_type.__bases__:
            if base is object or base in classes_on_branch or is_ignored(base, patterns):
                continue
            paths.extend(_list(base, path, patterns, classes_on_branch, objects_on_branch))

    return paths
