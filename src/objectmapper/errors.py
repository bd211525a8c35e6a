"""
Error taxonomy for path resolution.

Core functions in resolver and construction raise these. The ObjectMapper
facade is the only place that turns them into None/False.
"""
from typing import Any, Optional


class ObjectMapperError(Exception):
    """Base class for every failure raised while walking a property path."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path!r}: {message}")


class PropertyNotFound(ObjectMapperError):
    """A segment names no field, or an owner along the path is None."""

    def __init__(self, path: str, segment: Optional[str], reason: str = "no such property"):
        self.segment = segment
        super().__init__(path, f"{reason} (segment {segment!r})")


class ConstructionFailed(ObjectMapperError):
    """A missing intermediate object could not be built."""

    def __init__(self, path: str, segment: str, target_type: Any):
        self.segment = segment
        self.target_type = target_type
        type_name = getattr(target_type, '__qualname__', repr(target_type))
        super().__init__(path, f"cannot construct {type_name} for segment {segment!r}")


class AssignmentRejected(ObjectMapperError):
    """The final slot refused the value."""

    def __init__(self, path: str, value: Any):
        self.value = value
        super().__init__(path, f"assignment of {type(value).__name__} rejected")
