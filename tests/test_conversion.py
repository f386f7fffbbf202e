"""Tests for concreteness checks and type conversions."""

from __future__ import annotations

import collections.abc
import numbers
import os
import pathlib
import typing
from abc import ABC, abstractmethod
from typing import Any, Protocol

from precompile_signatures.conversion import convert_type, is_concrete, is_concrete_type
from precompile_signatures.models import Abstract, Concrete, Sum, Unresolved


class Reader(Protocol):
    def read(self) -> bytes: ...


class Base(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Impl(Base):
    def run(self) -> None:
        pass


def test_is_concrete_type_accepts_instantiable_classes() -> None:
    assert is_concrete_type(int)
    assert is_concrete_type(type(None))
    assert is_concrete_type(Impl)
    assert is_concrete_type(pathlib.Path)
    assert is_concrete_type(dict[str, int])
    assert is_concrete_type(tuple[int, ...])


def test_is_concrete_type_rejects_interfaces() -> None:
    assert not is_concrete_type(object)
    assert not is_concrete_type(Any)
    assert not is_concrete_type(Base)
    assert not is_concrete_type(Reader)
    assert not is_concrete_type(numbers.Number)
    assert not is_concrete_type(collections.abc.Iterable)
    assert not is_concrete_type(int | str)
    assert not is_concrete_type(typing.Literal[1])
    assert not is_concrete_type(list[numbers.Real])


def test_convert_type_leaves_concrete_descriptors_alone() -> None:
    descriptor = Concrete(str)
    assert convert_type(descriptor, {str: bytes}) is descriptor


def test_convert_type_maps_abstract_to_concrete() -> None:
    converted = convert_type(Abstract(os.PathLike), {os.PathLike: pathlib.Path})
    assert converted == Concrete(pathlib.Path)
    assert is_concrete(converted)


def test_convert_type_keeps_unmapped_abstract_types() -> None:
    descriptor = Abstract(numbers.Real)
    assert convert_type(descriptor, {os.PathLike: pathlib.Path}) is descriptor
    assert not is_concrete(descriptor)


def test_convert_type_to_abstract_target_stays_abstract() -> None:
    converted = convert_type(Abstract(Any), {Any: numbers.Number})
    assert converted == Abstract(numbers.Number)


def test_convert_type_ignores_sums_and_unresolved() -> None:
    union = Sum((Concrete(int), Abstract(Any)))
    assert convert_type(union, {Any: int}) is union
    unresolved = Unresolved("T")
    assert convert_type(unresolved, {}) is unresolved
