"""Property-based tests using Hypothesis for translation invariants.

These hold for *any* 64-bit input:
- translation is deterministic
- decimal, hex, and native forms of the same value agree
- hex rendering follows the 8/16-digit two's-complement rules
- meanings are unique and the primary fields mirror the first meaning
"""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from taskresult import translate
from taskresult.adapters.oslookup import TableMessageLookup
from taskresult.engine.normalizer import normalize_code

LOOKUP = TableMessageLookup()

int64 = st.integers(min_value=-(2**63), max_value=2**63 - 1)
non_negative = st.integers(min_value=0, max_value=2**63 - 1)
hresult_like = st.one_of(
    st.integers(min_value=0, max_value=0xFFFFFFFF),
    st.integers(min_value=-(2**31), max_value=-1),
    st.sampled_from([0, 267009, 0x8004131F, 0x80070002, 0x80070005, 5, 2]),
)


@given(int64)
def test_translation_is_idempotent(value):
    assert translate(value, lookup=LOOKUP) == translate(value, lookup=LOOKUP)


@given(non_negative)
def test_decimal_and_hex_forms_agree(value):
    native = translate(value, lookup=LOOKUP)
    assert translate(str(value), lookup=LOOKUP) == native
    assert translate(f"0x{value:X}", lookup=LOOKUP) == native
    assert translate(f"0X{value:x}", lookup=LOOKUP) == native


@given(int64)
def test_negative_forms_agree(value):
    native = translate(value, lookup=LOOKUP)
    assert translate(str(value), lookup=LOOKUP) == native
    assert translate(f"0x{value & 0xFFFFFFFFFFFFFFFF:016X}", lookup=LOOKUP) == native


@given(st.integers(min_value=2**63, max_value=2**64 - 1))
def test_unsigned_64_bit_wraps(value):
    assert normalize_code(value) == value - 2**64


@given(int64)
def test_hex_code_rules(value):
    hex_code = translate(value, lookup=LOOKUP).hex_code
    assert hex_code.startswith("0x")
    digits = hex_code[2:]
    assert digits == digits.upper()
    if 0 <= value <= 0xFFFFFFFF:
        assert len(digits) == 8
        assert int(digits, 16) == value
    elif value > 0xFFFFFFFF:
        assert len(digits) == 16
        assert int(digits, 16) == value
    elif value >= -(2**31):
        assert len(digits) == 8
        assert int(digits, 16) == value & 0xFFFFFFFF
    else:
        assert len(digits) == 16
        assert int(digits, 16) == value & 0xFFFFFFFFFFFFFFFF


@given(st.one_of(int64, hresult_like))
def test_result_invariants(value):
    result = translate(value, lookup=LOOKUP)
    low = value & 0xFFFFFFFF
    assert result.result_code == value
    assert result.facility_code == (low >> 16) & 0x1FFF
    assert result.facility
    messages = [m.message for m in result.meanings]
    assert len(messages) == len(set(messages))
    if result.meanings:
        primary = result.meanings[0]
        assert result.message == primary.message
        assert result.source == primary.source
        assert result.constant_name == primary.constant_name
        assert result.is_success == primary.is_success
    else:
        assert result.source == "Unknown"
        assert result.constant_name is None
        assert result.message == f"Unknown result code: {result.hex_code}"
        assert result.is_success == (not low >> 31)


@given(st.one_of(int64, hresult_like))
def test_taxonomy_meanings_come_first(value):
    sources = [m.source for m in translate(value, lookup=LOOKUP).meanings]
    assert sources == sorted(sources, key=lambda s: s != "DomainTaxonomy")


@given(st.text(max_size=20))
def test_arbitrary_text_never_raises(text):
    result = translate(text, lookup=LOOKUP)
    if text.strip():
        assert result is not None
    else:
        assert result is None
