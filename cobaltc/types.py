"""C types, typed constants and compile options."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

INT_SIZE = 4
LONG_SIZE = 8
UNSIGNED_INT_SIZE = 4
UNSIGNED_LONG_SIZE = 8
DOUBLE_SIZE = 8


class ConstantKind(Enum):
    """The C type a constant value carries."""

    INT = "int"
    LONG = "long"
    UNSIGNED_INT = "unsigned int"
    UNSIGNED_LONG = "unsigned long"
    DOUBLE = "double"

    @property
    def type_name(self) -> str:
        return self.value

    @property
    def bits(self) -> int:
        return 32 if self in (ConstantKind.INT, ConstantKind.UNSIGNED_INT) else 64

    @property
    def is_signed(self) -> bool:
        return self in (ConstantKind.INT, ConstantKind.LONG)

    @property
    def is_integer(self) -> bool:
        return self is not ConstantKind.DOUBLE


def _int_range(kind: ConstantKind) -> tuple[int, int]:
    if kind.is_signed:
        half = 1 << (kind.bits - 1)
        return -half, half - 1
    return 0, (1 << kind.bits) - 1


@dataclass(frozen=True)
class Constant:
    """A constant value together with its C type."""

    kind: ConstantKind
    value: int | float

    def __post_init__(self) -> None:
        if self.kind is ConstantKind.DOUBLE:
            if not isinstance(self.value, float):
                raise TypeError(f"double constant needs a float, got {self.value!r}")
            return
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"{self.kind.type_name} constant needs an int, got {self.value!r}")
        low, high = _int_range(self.kind)
        if not low <= self.value <= high:
            raise ValueError(f"{self.value} does not fit in {self.kind.type_name}")


@dataclass
class CompileOptions:
    enable_assembly_comments: bool = False


class Type(ABC):
    """Base of all C types."""

    @abstractmethod
    def __str__(self) -> str: ...

    @property
    def alignment(self) -> int:
        return 0

    @property
    def size(self) -> int:
        return 0

    @property
    def is_signed(self) -> bool:
        return False

    @property
    def is_arithmetic(self) -> bool:
        return False

    @property
    def is_integer(self) -> bool:
        return False

    @property
    def is_scalar(self) -> bool:
        return False

    def equals(self, other: Type) -> bool:
        """Structural type equality."""
        return type(self) is type(other) and self == other


@dataclass(frozen=True)
class IntType(Type):
    def __str__(self) -> str:
        return "int"

    is_signed = property(lambda self: True)
    is_arithmetic = property(lambda self: True)
    is_integer = property(lambda self: True)
    is_scalar = property(lambda self: True)
    alignment = property(lambda self: 4)
    size = property(lambda self: INT_SIZE)


@dataclass(frozen=True)
class LongType(Type):
    def __str__(self) -> str:
        return "long"

    is_signed = property(lambda self: True)
    is_arithmetic = property(lambda self: True)
    is_integer = property(lambda self: True)
    is_scalar = property(lambda self: True)
    alignment = property(lambda self: 8)
    size = property(lambda self: LONG_SIZE)


@dataclass(frozen=True)
class UnsignedIntType(Type):
    def __str__(self) -> str:
        return "unsigned int"

    is_arithmetic = property(lambda self: True)
    is_integer = property(lambda self: True)
    is_scalar = property(lambda self: True)
    alignment = property(lambda self: 4)
    size = property(lambda self: UNSIGNED_INT_SIZE)


@dataclass(frozen=True)
class UnsignedLongType(Type):
    def __str__(self) -> str:
        return "unsigned long"

    is_arithmetic = property(lambda self: True)
    is_integer = property(lambda self: True)
    is_scalar = property(lambda self: True)
    alignment = property(lambda self: 8)
    size = property(lambda self: UNSIGNED_LONG_SIZE)


@dataclass(frozen=True)
class DoubleType(Type):
    def __str__(self) -> str:
        return "double"

    is_arithmetic = property(lambda self: True)
    is_scalar = property(lambda self: True)
    alignment = property(lambda self: 8)
    size = property(lambda self: DOUBLE_SIZE)


@dataclass(frozen=True)
class FunctionType(Type):
    return_type: Type
    parameters_type: tuple[Type, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters_type", tuple(self.parameters_type))

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters_type)
        return f"{self.return_type}({params})"


@dataclass(frozen=True)
class PointerType(Type):
    referenced_type: Type

    def __str__(self) -> str:
        return f"{self.referenced_type}*"

    is_scalar = property(lambda self: True)
    size = property(lambda self: UNSIGNED_LONG_SIZE)


@dataclass(frozen=True)
class ArrayType(Type):
    element_type: Type
    array_size: int

    def __str__(self) -> str:
        return f"[{self.array_size}]{self.element_type}"

    @property
    def size(self) -> int:
        return self.array_size * self.element_type.size

    @property
    def alignment(self) -> int:
        return self.element_type.alignment