import pytest

from cobaltc.types import (
    ArrayType,
    CompileOptions,
    Constant,
    ConstantKind,
    DoubleType,
    FunctionType,
    IntType,
    LongType,
    PointerType,
    UnsignedIntType,
    UnsignedLongType,
)


@pytest.mark.parametrize(
    "ctype, name",
    [
        (IntType(), "int"),
        (LongType(), "long"),
        (UnsignedIntType(), "unsigned int"),
        (UnsignedLongType(), "unsigned long"),
        (DoubleType(), "double"),
    ],
)
def test_scalar_names(ctype, name):
    assert str(ctype) == name


@pytest.mark.parametrize(
    "ctype, size",
    [
        (IntType(), 4),
        (LongType(), 8),
        (UnsignedIntType(), 4),
        (UnsignedLongType(), 8),
        (DoubleType(), 8),
        (PointerType(IntType()), 8),
    ],
)
def test_sizes(ctype, size):
    assert ctype.size == size


def test_function_type_string():
    assert str(FunctionType(IntType(), [LongType(), DoubleType()])) == "int(long, double)"


def test_pointer_type_string():
    assert str(PointerType(IntType())) == "int*"


def test_array_type_string():
    assert str(ArrayType(IntType(), 3)) == "[3]int"


def test_nested_array_size_matches_flat_array():
    nested = ArrayType(ArrayType(IntType(), 2), 5)
    flat = ArrayType(IntType(), 10)
    assert nested.size == flat.size


def test_array_alignment_follows_element():
    assert ArrayType(LongType(), 3).alignment == LongType().alignment
    assert ArrayType(IntType(), 3).alignment == IntType().alignment


def test_scalar_equality():
    assert IntType().equals(IntType())
    assert not IntType().equals(LongType())
    assert not UnsignedIntType().equals(IntType())


def test_function_equality_is_structural():
    a = FunctionType(IntType(), [LongType(), PointerType(IntType())])
    b = FunctionType(IntType(), (LongType(), PointerType(IntType())))
    c = FunctionType(IntType(), [LongType()])
    d = FunctionType(LongType(), [LongType(), PointerType(IntType())])
    assert a.equals(b)
    assert not a.equals(c)
    assert not a.equals(d)


def test_pointer_and_array_equality():
    assert PointerType(IntType()).equals(PointerType(IntType()))
    assert not PointerType(IntType()).equals(PointerType(LongType()))
    assert ArrayType(IntType(), 3).equals(ArrayType(IntType(), 3))
    assert not ArrayType(IntType(), 3).equals(ArrayType(IntType(), 4))
    assert not ArrayType(IntType(), 3).equals(PointerType(IntType()))


def test_type_properties():
    assert IntType().is_signed and IntType().is_integer
    assert not UnsignedIntType().is_signed
    assert DoubleType().is_arithmetic and not DoubleType().is_integer
    assert PointerType(IntType()).is_scalar
    assert not PointerType(IntType()).is_arithmetic
    assert not ArrayType(IntType(), 2).is_scalar
    assert not FunctionType(IntType(), []).is_scalar


def test_types_are_hashable():
    assert len({IntType(), IntType(), PointerType(IntType()), PointerType(IntType())}) == 2


def test_constant_rejects_out_of_range():
    with pytest.raises(ValueError):
        Constant(ConstantKind.INT, 2**31)
    with pytest.raises(ValueError):
        Constant(ConstantKind.UNSIGNED_LONG, -1)


def test_constant_rejects_wrong_python_type():
    with pytest.raises(TypeError):
        Constant(ConstantKind.INT, 1.5)
    with pytest.raises(TypeError):
        Constant(ConstantKind.DOUBLE, 1)


def test_compile_options_default():
    assert CompileOptions().enable_assembly_comments is False