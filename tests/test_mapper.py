"""Tests for the ObjectMapper facade.

Failures never escape: reads give None, writes give False.
"""
from dataclasses import dataclass, field
from typing import Optional

import pytest

from objectmapper import (
    ConstructionFailed,
    ObjectMapper,
    PropertyNotFound,
    SetReport,
    get_property,
    list_properties,
    set_property,
)


class L1:
    __i1: int

    def __init__(self):
        self.__i1 = 42


class L1Ex(L1):
    __e: int

    def __init__(self):
        super().__init__()
        self.__e = 39


class L0:
    __i0: int
    __l1: L1
    __l1b: L1

    def __init__(self):
        self.__i0 = 23
        self.__l1 = L1()
        self.__l1b = None


class Loose:
    def __init__(self):
        self.x = 1


class NoDefault:
    def __init__(self, required):
        self.required = required


@dataclass
class Order:
    number: int = 0
    customer: Optional['Customer'] = None
    blocker: Optional[NoDefault] = None


@dataclass
class Address:
    city: str = ""


@dataclass
class Customer:
    name: str = ""
    address: Address = field(default_factory=Address)


class Unreadable:
    customer: Customer

    @property
    def customer(self):
        raise RuntimeError("boom")


class TestGet:
    """Reading through the facade."""

    def test_simple_property(self):
        assert ObjectMapper.get(L0(), "__i0") == 23

    def test_existing_deep_property(self):
        assert ObjectMapper.get(L0(), "__l1.__i1") == 42

    def test_non_existing_deep_property(self):
        assert ObjectMapper.get(L0(), "__l1b.__i1") is None

    @pytest.mark.parametrize("root, path", [
        (L0(), "missing.path"),
        (L0(), "__i0.deeper"),
        (L0(), ""),
        (L0(), "a..b"),
        (None, "anything"),
        (42, "real"),
        (object(), "x"),
    ])
    def test_missing_never_raises(self, root, path):
        assert ObjectMapper.get(root, path) is None

    def test_many(self):
        result = ObjectMapper.get(L0(), ["__l1.__i1", "nope", "__i0"])
        assert list(result) == ["__l1.__i1", "nope", "__i0"]
        assert result == {"__l1.__i1": 42, "nope": None, "__i0": 23}

    def test_everything(self):
        order = Order(number=7, customer=Customer(name="Ada"))
        result = ObjectMapper.get(order)
        assert list(result) == ObjectMapper.list(order)
        assert result["number"] == 7
        assert result["customer.name"] == "Ada"
        assert result["customer.address"] == Address()
        assert result["blocker"] is None

    def test_failure_logged_at_debug(self, debug_log):
        ObjectMapper.get(L0(), "missing")
        assert any("Could not get property" in r.getMessage() for r in debug_log.records)

    def test_module_alias(self):
        assert get_property(L0(), "__i0") == 23

    def test_unreadable_property(self):
        assert ObjectMapper.get(Unreadable(), "customer.name") is None
        assert ObjectMapper.get(Unreadable(), "customer") is None

    def test_everything_with_unreadable_property(self):
        assert ObjectMapper.get(Unreadable()) == {
            "customer": None,
            "customer.name": None,
            "customer.address": None,
            "customer.address.city": None,
        }

    def test_everything_includes_undeclared_attributes(self):
        loose = Loose()
        assert ObjectMapper.get(loose) == {"x": 1}
        assert ObjectMapper.get(loose) == ObjectMapper.get(loose, ObjectMapper.list(loose))


class TestSet:
    """Writing through the facade."""

    def test_simple_property(self):
        l0 = L0()
        assert ObjectMapper.set(l0, "__i0", 13)
        assert ObjectMapper.get(l0, "__i0") == 13

    def test_existing_deep_property(self):
        l0 = L0()
        assert ObjectMapper.set(l0, "__l1.__i1", 24)
        assert ObjectMapper.get(l0, "__l1.__i1") == 24

    def test_non_existing_deep_property(self):
        l0 = L0()
        assert ObjectMapper.set(l0, "__l1b.__i1", 59)
        assert ObjectMapper.get(l0, "__l1b.__i1") == 59

    def test_created_intermediate_is_readable(self):
        l0 = L0()
        ObjectMapper.set(l0, "__l1b.__i1", 1)
        assert isinstance(ObjectMapper.get(l0, "__l1b"), L1)

    def test_invalid_property(self):
        assert ObjectMapper.set(object(), "invalid", None) is False

    def test_invalid_leaves_root_unchanged(self):
        order = Order(number=3)
        assert ObjectMapper.set(order, "nothing.here", 1) is False
        assert order == Order(number=3)

    def test_construction_failure(self):
        order = Order()
        assert ObjectMapper.set(order, "blocker.required", 1) is False
        assert order.blocker is None

    def test_dynamic_type(self):
        l0 = L0()
        ObjectMapper.set(l0, "__l1", L1Ex())
        assert ObjectMapper.get(l0, "__l1.__e") == 39
        ObjectMapper.set(l0, "__l1.__e", 73)
        assert ObjectMapper.get(l0, "__l1.__e") == 73

    def test_round_trip(self):
        order = Order()
        for path, value in [("number", 5), ("customer.name", "Ada"), ("customer.address.city", "Szeged")]:
            assert ObjectMapper.set(order, path, value)
            assert ObjectMapper.get(order, path) == value

    def test_single_path_needs_value(self):
        with pytest.raises(TypeError):
            ObjectMapper.set(L0(), "__i0")

    def test_mapping_takes_no_value(self):
        with pytest.raises(TypeError):
            ObjectMapper.set(L0(), {"__i0": 1}, 2)

    def test_module_alias(self):
        l0 = L0()
        assert set_property(l0, "__i0", 1)
        assert get_property(l0, "__i0") == 1


class TestBulkSet:
    """Mapping writes attempt every entry."""

    def test_all_succeed(self):
        order = Order()
        assert ObjectMapper.set(order, {"number": 1, "customer.name": "Ada"})
        assert order.number == 1
        assert order.customer.name == "Ada"

    def test_failure_does_not_stop_later_entries(self):
        l0 = L0()
        assert ObjectMapper.set(l0, {"invalid.path": 1, "__i0": 13}) is False
        assert ObjectMapper.get(l0, "__i0") == 13

    def test_failure_after_success(self):
        l0 = L0()
        assert ObjectMapper.set(l0, {"__i0": 13, "invalid.path": 1}) is False
        assert ObjectMapper.get(l0, "__i0") == 13

    def test_report(self):
        order = Order()
        report = ObjectMapper.set_report(order, {
            "number": 2,
            "missing": 1,
            "blocker.required": 1,
        })
        assert isinstance(report, SetReport)
        assert not report
        assert report.attempted == 3
        assert list(report.failures) == ["missing", "blocker.required"]
        assert isinstance(report.failures["missing"], PropertyNotFound)
        assert isinstance(report.failures["blocker.required"], ConstructionFailed)
        assert order.number == 2

    def test_empty_mapping(self):
        assert ObjectMapper.set(L0(), {}) is True


class TestList:
    """Listing through the facade."""

    def test_class(self):
        assert ObjectMapper.list(Customer) == ["name", "address", "address.city"]

    def test_prefix(self):
        assert ObjectMapper.list(Customer, "c") == ["c.name", "c.address", "c.address.city"]

    def test_ignore_positional(self):
        assert ObjectMapper.list(Customer, [r".*\.Address"]) == ["name", "address"]

    def test_prefix_and_ignore(self):
        assert ObjectMapper.list(Customer, "c", [r".*\.Address"]) == ["c.name", "c.address"]

    def test_ignore_given_twice(self):
        with pytest.raises(TypeError):
            ObjectMapper.list(Customer, [], ignore=[])

    def test_private_instance_fields(self):
        assert ObjectMapper.list(L0()) == ["__i0", "__l1", "__l1.__i1", "__l1b", "__l1b.__i1"]

    def test_same_as_module_function(self):
        assert ObjectMapper.list(Order) == list_properties(Order)

    def test_default_ignore_list_is_a_copy(self):
        ignored = ObjectMapper.default_ignore_list()
        ignored.clear()
        assert ObjectMapper.default_ignore_list()
        assert ObjectMapper.list(Customer) == ["name", "address", "address.city"]
