"""
Read, write and enumerate nested object properties by dotted path.

Instead of chaining attribute access and None checks by hand, name the
property you want with a path like ``"customer.address.city"``.

Key Features:
- Read any field, private ones included, without touching the object's
  own ``__getattr__``/``__getattribute__`` hooks
- Write any field, creating None intermediates from their declared type
- List every path of a class, or of an instance by the types it actually holds
- Failures come back as None/False, never as exceptions

Quick Start:
    >>> from dataclasses import dataclass
    >>> from typing import Optional
    >>> from objectmapper import ObjectMapper
    >>>
    >>> @dataclass
    ... class Address:
    ...     city: str = ""
    >>>
    >>> @dataclass
    ... class Customer:
    ...     address: Optional[Address] = None
    ...     name: str = ""
    >>>
    >>> customer = Customer()
    >>> ObjectMapper.set(customer, "address.city", "Szeged")
    True
    >>> ObjectMapper.get(customer, "address.city")
    'Szeged'
    >>> ObjectMapper.list(Customer)
    ['address', 'address.city', 'name']

Architecture:
    fields       -> which names a class declares, raw read/write of them
    resolver     -> path walking for reads and auto-creating writes
    construction -> building missing intermediates (constructor or factory)
    lister       -> recursive path enumeration with type ignore patterns
    mapper       -> ObjectMapper facade, exceptions become None/False

Modules:
    - errors: PropertyNotFound, ConstructionFailed, AssignmentRejected
    - property_ref: PropertyRef (owner + field of a resolved slot)
"""

# Errors
from objectmapper.errors import (
    ObjectMapperError,
    PropertyNotFound,
    ConstructionFailed,
    AssignmentRejected,
)

# Fields
from objectmapper.fields import FieldAccessor, declared_fields, find_field, undeclared_fields

# Resolution
from objectmapper.property_ref import PropertyRef
from objectmapper.resolver import resolve, read, write, split_path

# Construction
from objectmapper.construction import (
    register_factory,
    unregister_factory,
    get_factory,
    clear_factories,
)

# Listing
from objectmapper.lister import (
    DEFAULT_IGNORED_TYPES,
    default_ignore_list,
    list_properties,
    is_ignored,
)

# Facade
from objectmapper.mapper import ObjectMapper, SetReport, get_property, set_property

__all__ = [
    # Errors
    'ObjectMapperError',
    'PropertyNotFound',
    'ConstructionFailed',
    'AssignmentRejected',
    # Fields
    'FieldAccessor',
    'declared_fields',
    'find_field',
    'undeclared_fields',
    # Resolution
    'PropertyRef',
    'resolve',
    'read',
    'write',
    'split_path',
    # Construction
    'register_factory',
    'unregister_factory',
    'get_factory',
    'clear_factories',
    # Listing
    'DEFAULT_IGNORED_TYPES',
    'default_ignore_list',
    'list_properties',
    'is_ignored',
    # Facade
    'ObjectMapper',
    'SetReport',
    'get_property',
    'set_property',
]

__version__ = '1.1.0'
__description__ = 'Nested property access by dotted path'
