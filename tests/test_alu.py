import pytest

from dmgcore import alu

BYTES = [0x00, 0x01, 0x0F, 0x10, 0x7F, 0x80, 0xF0, 0xFF]


def test_add_overflow_to_zero():
    result = alu.add(0xFF, 0x01)
    assert result.value == 0
    assert result.zero and result.carry and result.half_carry
    assert not result.subtract


def test_add_half_carry_without_carry():
    result = alu.add(0x0F, 0x01)
    assert result.half_carry is True
    assert result.carry is False
    assert result.zero is False


def test_add_with_carry_in_crosses_boundary():
    result = alu.add(0xFE, 0x01, True)
    assert result.value == 0
    assert result.carry is True
    assert result.half_carry is True


@pytest.mark.parametrize("a", BYTES)
@pytest.mark.parametrize("value", BYTES)
def test_sub_undoes_add(a, value):
    added = alu.add(a, value)
    assert alu.sub(added.value, value).value == a
    assert alu.sub(added.value, value).carry == added.carry


@pytest.mark.parametrize("a", BYTES)
@pytest.mark.parametrize("value", BYTES)
def test_sub_borrow_tracks_ordering(a, value):
    result = alu.sub(a, value)
    assert result.subtract is True
    assert result.carry == (a < value)
    assert result.zero == (a == value)


def test_sub_with_borrow_in():
    result = alu.sub(0x00, 0x00, True)
    assert result.value == 0xFF
    assert result.carry is True
    assert result.half_carry is True


@pytest.mark.parametrize("a", BYTES)
@pytest.mark.parametrize("value", BYTES)
def test_compare_matches_sub_flags(a, value):
    assert alu.compare(a, value) == alu.sub(a, value)


def test_and_flags():
    result = alu.and_(0xF0, 0x0F)
    assert result.value == 0
    assert result.zero and result.half_carry
    assert result.carry is False and result.subtract is False


@pytest.mark.parametrize("a", BYTES)
def test_xor_with_self_is_zero(a):
    result = alu.xor(a, a)
    assert result.value == 0
    assert result.zero is True
    assert result.half_carry is False and result.carry is False


@pytest.mark.parametrize("a", BYTES)
@pytest.mark.parametrize("value", BYTES)
def test_logic_operations_are_commutative(a, value):
    assert alu.and_(a, value) == alu.and_(value, a)
    assert alu.or_(a, value) == alu.or_(value, a)
    assert alu.xor(a, value) == alu.xor(value, a)


@pytest.mark.parametrize("a", BYTES)
def test_or_with_zero_is_identity(a):
    result = alu.or_(a, 0)
    assert result.value == a
    assert result.zero == (a == 0)
    assert result.carry is False


def test_inc_wraps_and_keeps_carry():
    result = alu.inc(0xFF)
    assert result.value == 0
    assert result.zero and result.half_carry
    assert result.carry is None
    assert result.subtract is False


def test_dec_wraps_and_keeps_carry():
    result = alu.dec(0x00)
    assert result.value == 0xFF
    assert result.half_carry is True
    assert result.subtract is True
    assert result.carry is None


@pytest.mark.parametrize("value", BYTES)
def test_dec_undoes_inc(value):
    assert alu.dec(alu.inc(value).value).value == value
    assert alu.inc(alu.dec(value).value).value == value


def test_dec_to_zero_sets_zero():
    result = alu.dec(0x01)
    assert result.zero is True
    assert result.half_carry is False