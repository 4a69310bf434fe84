"""
A file for testing the NumEntry and BytesEntry classes
"""
from secrets import token_bytes

import pytest

from scriptexec.core import SCRIPT, NonMinimalEncodingError, NumericOverflowError, ScriptNumTooLongError, \
    StackContractError
from scriptexec.script import BytesEntry, NumEntry, StackEntry


# --- Commitment --- #

@pytest.mark.parametrize("value, expected_hex", [
    (0, "00000000"),
    (1, "01000000"),
    (0x01020304, "04030201"),
    (SCRIPT.MAX_INT32, "ffffff7f"),
    (SCRIPT.MAX_UINT32, "ffffffff"),
    (-1, "ffffffff"),
    (-2, "feffffff"),
])
def test_num_entry_serialize(value, expected_hex):
    assert NumEntry(value).serialize_to_bytes() == bytes.fromhex(expected_hex)


def test_num_entry_serialize_too_wide():
    with pytest.raises(StackContractError):
        NumEntry(SCRIPT.MAX_UINT32 + 1).serialize_to_bytes()


@pytest.mark.parametrize("data_hex, expected_hex", [
    ("", "00000000"),
    ("02", "02000000"),
    ("0203", "02030000"),
    ("deadbeef", "deadbeef"),
])
def test_bytes_entry_serialize(data_hex, expected_hex):
    entry = BytesEntry.from_bytes(bytes.fromhex(data_hex))
    assert entry.serialize_to_bytes() == bytes.fromhex(expected_hex)
    # Padding is applied to the output only
    assert entry.to_bytes() == bytes.fromhex(data_hex)


def test_bytes_entry_serialize_too_wide():
    with pytest.raises(StackContractError):
        BytesEntry.from_bytes(token_bytes(5)).serialize_to_bytes()


# --- Views --- #

def test_num_entry_views():
    entry = NumEntry(-255)
    assert entry.value == -255
    assert entry.to_bytes() == bytes.fromhex("ff80")
    assert entry.to_number() == -255
    assert entry.to_number(require_minimal=True) == -255


def test_num_entry_overflow():
    assert NumEntry(SCRIPT.MAX_INT32).to_number() == SCRIPT.MAX_INT32
    with pytest.raises(NumericOverflowError):
        NumEntry(SCRIPT.MAX_INT32 + 1).to_number()


def test_num_entry_no_lower_bound():
    """
    Only the upper bound of the 32-bit window is checked for native numbers
    """
    low = -(1 << 40)
    assert NumEntry(low).to_number() == low
    assert NumEntry(-SCRIPT.MAX_INT32 - 1).to_number() == -SCRIPT.MAX_INT32 - 1


def test_bytes_entry_views():
    entry = BytesEntry.from_bytes(b"\x05\x00")
    assert entry.to_bytes() == b"\x05\x00"
    assert entry.to_number() == 5
    with pytest.raises(NonMinimalEncodingError):
        entry.to_number(require_minimal=True)
    with pytest.raises(ScriptNumTooLongError):
        BytesEntry.from_bytes(bytes(5)).to_number()


# --- Aliasing --- #

def test_shared_buffer():
    entry = BytesEntry.from_bytes(b"\x01\x02")
    alias = entry.share()
    assert alias is not entry
    assert alias.is_shared_with(entry)

    alias.buffer[0] = 0xff
    assert entry.to_bytes() == b"\xff\x02"

    alias.buffer.extend(b"\x03")
    assert entry.to_bytes() == b"\xff\x02\x03"


def test_make_unique():
    entry = BytesEntry.from_bytes(b"\x01\x02")
    alias = entry.share()
    unique = alias.make_unique()
    assert not unique.is_shared_with(entry)
    assert unique == entry

    unique.buffer[0] = 0xff
    assert entry.to_bytes() == b"\x01\x02"
    assert alias.to_bytes() == b"\x01\x02"


def test_bytes_entry_references_buffer():
    buffer = bytearray(b"\x01")
    entry = BytesEntry(buffer)
    buffer.append(0x02)
    assert entry.to_bytes() == b"\x01\x02"

    # from_bytes copies
    data = bytearray(b"\x01")
    copied = BytesEntry.from_bytes(data)
    data.append(0x02)
    assert copied.to_bytes() == b"\x01"


# --- Type and equality --- #

def test_entry_types():
    assert isinstance(NumEntry(1), StackEntry)
    assert isinstance(BytesEntry.from_bytes(b""), StackEntry)
    with pytest.raises(TypeError):
        NumEntry("1")
    with pytest.raises(TypeError):
        NumEntry(True)
    with pytest.raises(TypeError):
        BytesEntry(b"\x01")


def test_entry_equality():
    assert NumEntry(1) == NumEntry(1)
    assert NumEntry(1) != NumEntry(2)
    assert BytesEntry.from_bytes(b"\x01") == BytesEntry.from_bytes(b"\x01")
    # Same value, different variant
    assert NumEntry(1) != BytesEntry.from_bytes(b"\x01")
    assert BytesEntry.from_bytes(b"\x01") != NumEntry(1)
    assert repr(NumEntry(7)) == "NumEntry(7)"
    assert repr(BytesEntry.from_bytes(b"\xab")) == "BytesEntry(ab)"
