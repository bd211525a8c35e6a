"""
ObjectMapper: the public get/set/list surface.

This is the boundary where ObjectMapperError stops. Reads that fail give
None, writes that fail give False, and bulk operations keep going after a
failure. Use ``objectmapper.resolver`` directly to see the exceptions.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from objectmapper import lister, resolver
from objectmapper.errors import ObjectMapperError

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class SetReport:
    """Outcome of a bulk write: which paths failed, and why."""
    attempted: int
    failures: Dict[str, ObjectMapperError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __bool__(self) -> bool:
        return self.ok


class ObjectMapper:
    """Read, write and list nested properties by dotted path.

    Example:
        >>> ObjectMapper.set(order, "customer.address.city", "Szeged")
        True
        >>> ObjectMapper.get(order, "customer.address.city")
        'Szeged'
        >>> ObjectMapper.list(Order)
        ['customer', 'customer.address', 'customer.address.city', ...]
    """

    @classmethod
    def get(cls, root: Any, properties: Union[str, Iterable[str], None] = None) -> Any:
        """Read one path, several paths, or everything.

        Args:
            root: Object to read from.
            properties: A dotted path, an iterable of paths, or None for
                every path ``list(root)`` finds.

        Returns:
            The value (None if the path does not resolve) for a single path,
            otherwise a dict of path -> value in the order given.
        """
        if isinstance(properties, str):
            return cls._get_one(root, properties)
        if properties is None:
            properties = cls.list(root)
        return {path: cls._get_one(root, path) for path in properties}

    @classmethod
    def _get_one(cls, root: Any, path: str) -> Any:
        try:
            return resolver.read(root, path)
        except ObjectMapperError as e:
            logger.debug(f"Could not get property: {e}")
            return None

    @classmethod
    def set(cls, root: Any, properties: Union[str, Mapping[str, Any]], value: Any = _MISSING) -> bool:
        """Write one path, or every entry of a mapping.

        Missing intermediates are created with their zero-argument
        constructor (or a registered factory). With a mapping every entry is
        attempted and the result is True only if all of them succeeded.
        """
        if isinstance(properties, str):
            if value is _MISSING:
                raise TypeError("set() with a single path needs a value")
            return cls._set_one(root, properties, value) is None
        if value is not _MISSING:
            raise TypeError("set() with a mapping takes no separate value")
        return cls.set_report(root, properties).ok

    @classmethod
    def set_report(cls, root: Any, properties: Mapping[str, Any]) -> SetReport:
        """Like ``set(root, mapping)`` but reports each failed path."""
        failures = {}
        for path, value in properties.items():
            error = cls._set_one(root, path, value)
            if error is not None:
                failures[path] = error
        return SetReport(attempted=len(properties), failures=failures)

    @classmethod
    def _set_one(cls, root: Any, path: str, value: Any) -> Optional[ObjectMapperError]:
        try:
            resolver.write(root, path, value)
        except ObjectMapperError as e:
            logger.debug(f"Could not set property: {e}")
            return e
        return None

    @classmethod
    def list(
        cls,
        subject: Any,
        prefix: Union[str, Sequence[lister.IgnorePattern], None] = None,
        ignore: Optional[Sequence[lister.IgnorePattern]] = None,
    ):
        """List every property path of a class or instance.

        ``list(subject, ignore_list)`` is accepted as shorthand for
        ``list(subject, ignore=ignore_list)``.
        """
        if prefix is not None and not isinstance(prefix, str):
            if ignore is not None:
                raise TypeError("ignore patterns given twice")
            prefix, ignore = None, prefix
        return lister.list_properties(subject, prefix, ignore)

    @staticmethod
    def default_ignore_list():
        return lister.default_ignore_list()


def get_property(root: Any, path: str) -> Any:
    return ObjectMapper.get(root, path)


def set_property(root: Any, path: str, value: Any) -> bool:
    return ObjectMapper.set(root, path, value)
