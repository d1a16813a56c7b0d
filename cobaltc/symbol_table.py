"""Symbol table, static initializers and constant conversion."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Optional, Union

from cobaltc.types import (
    Constant,
    ConstantKind,
    DoubleType,
    IntType,
    LongType,
    PointerType,
    Type,
    UnsignedIntType,
    UnsignedLongType,
)


class ConstantConversionError(ValueError):
    """A constant cannot be converted to the requested type."""


@dataclass
class ZeroInit:
    size: int


_ZERO_SIZES = {
    ConstantKind.INT: IntType().size,
    ConstantKind.LONG: LongType().size,
    ConstantKind.UNSIGNED_INT: UnsignedIntType().size,
    ConstantKind.UNSIGNED_LONG: UnsignedLongType().size,
    ConstantKind.DOUBLE: DoubleType().size,
}


@dataclass
class InitialValue:
    """One item of a static initializer: a constant or a run of zero bytes."""

    value: Union[Constant, ZeroInit]

    @classmethod
    def from_constant(cls, constant: Optional[Constant]) -> InitialValue:
        """Zero constants become zero runs of their type's size; -0.0 stays a constant."""
        if constant is None:
            return cls(ZeroInit(0))
        if constant.kind is ConstantKind.DOUBLE:
            is_zero = constant.value == 0.0 and math.copysign(1.0, constant.value) > 0
        else:
            is_zero = constant.value == 0
        if is_zero:
            return cls(ZeroInit(_ZERO_SIZES[constant.kind]))
        return cls(constant)

    @property
    def is_zero(self) -> bool:
        return isinstance(self.value, ZeroInit)

    @property
    def constant_value(self) -> Constant:
        if isinstance(self.value, ZeroInit):
            raise ValueError("initial value is a zero run, not a constant")
        return self.value

    @property
    def zero_size(self) -> int:
        if not isinstance(self.value, ZeroInit):
            raise ValueError("initial value is a constant, not a zero run")
        return self.value.size

    @zero_size.setter
    def zero_size(self, size: int) -> None:
        if not isinstance(self.value, ZeroInit):
            raise ValueError("initial value is a constant, not a zero run")
        self.value.size = size


@dataclass(frozen=True)
class TentativeInit:
    pass


@dataclass
class StaticInitialValue:
    values: list[InitialValue] = field(default_factory=list)


@dataclass(frozen=True)
class NoInit:
    pass


StaticInitializer = Union[TentativeInit, StaticInitialValue, NoInit]


@dataclass
class FunctionAttribute:
    defined: bool = False
    is_global: bool = False


@dataclass
class StaticAttribute:
    init: StaticInitializer
    is_global: bool = False


@dataclass(frozen=True)
class LocalAttribute:
    pass


IdentifierAttribute = Union[FunctionAttribute, StaticAttribute, LocalAttribute]


@dataclass
class SymbolEntry:
    type: Type
    attribute: IdentifierAttribute


class SymbolTable(Mapping[str, SymbolEntry]):
    """Maps identifier names to their type and attributes."""

    def __init__(self) -> None:
        self._symbols: dict[str, SymbolEntry] = {}

    def __getitem__(self, name: str) -> SymbolEntry:
        return self._symbols[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __len__(self) -> int:
        return len(self._symbols)

    def insert_symbol(self, name: str, type: Type, attribute: IdentifierAttribute) -> None:
        """Add a new symbol; raise ValueError if the name is already present."""
        if name in self._symbols:
            raise ValueError(f"Symbol '{name}' already exists in symbol table")
        self._symbols[name] = SymbolEntry(type, attribute)

    def insert_or_assign_symbol(self, name: str, type: Type, attribute: IdentifierAttribute) -> None:
        self._symbols[name] = SymbolEntry(type, attribute)


_TARGET_KINDS: dict[type, ConstantKind] = {
    IntType: ConstantKind.INT,
    LongType: ConstantKind.LONG,
    UnsignedIntType: ConstantKind.UNSIGNED_INT,
    UnsignedLongType: ConstantKind.UNSIGNED_LONG,
    DoubleType: ConstantKind.DOUBLE,
}

_OVERFLOW_NAMES = {
    ConstantKind.INT: "int",
    ConstantKind.LONG: "long",
    ConstantKind.UNSIGNED_INT: "unsigned",
    ConstantKind.UNSIGNED_LONG: "unsigned long",
}


def _target_kind(target_type: Type) -> Optional[ConstantKind]:
    for cls, kind in _TARGET_KINDS.items():
        if isinstance(target_type, cls):
            return kind
    return None


def _bounds(kind: ConstantKind) -> tuple[int, int]:
    if kind.is_signed:
        half = 1 << (kind.bits - 1)
        return -half, half - 1
    return 0, (1 << kind.bits) - 1


def _wrap(value: int, kind: ConstantKind) -> int:
    modulus = 1 << kind.bits
    value %= modulus
    if kind.is_signed and value >= modulus // 2:
        value -= modulus
    return value


def convert_constant_type(
    value: Optional[Constant],
    target_type: Type,
    warning_callback: Optional[Callable[[str], None]] = None,
) -> Constant:
    """Convert a constant to the given type as a C cast would.

    Raises ConstantConversionError when the conversion is impossible.
    """
    if value is None:
        raise ConstantConversionError("constant holds invalid value")

    if isinstance(target_type, PointerType):
        if is_null_pointer_constant(value):
            return Constant(ConstantKind.UNSIGNED_LONG, 0)
        raise ConstantConversionError("Cannot convert non-zero constant to pointer type")

    target_kind = _target_kind(target_type)
    source_name = value.kind.type_name
    target_name = target_kind.type_name if target_kind is not None else "unknown"
    if source_name != target_name and warning_callback is not None:
        warning_callback(f"converting from {source_name} to {target_name}")

    if target_kind is None:
        raise ConstantConversionError("Unsupported target type")

    if target_kind is ConstantKind.DOUBLE:
        return Constant(ConstantKind.DOUBLE, float(value.value))

    if value.kind is ConstantKind.DOUBLE:
        number = value.value
        low, high = _bounds(target_kind)
        if math.isnan(number) or math.isinf(number) or number > high or number < low:
            raise ConstantConversionError(
                f"Conversion from double constant to {_OVERFLOW_NAMES[target_kind]} overflow"
            )
        return Constant(target_kind, int(number))

    return Constant(target_kind, _wrap(int(value.value), target_kind))


def is_null_pointer_constant(constant: Optional[Constant]) -> bool:
    """An integer constant equal to zero."""
    return constant is not None and constant.kind.is_integer and constant.value == 0