"""
The canonical integer codec for Bitcoin Script ("scriptnum")

Bitcoin script uses a special encoding for integers:
- Little-endian representation of the magnitude
- Negative numbers set the sign bit (0x80) in the last byte
- Zero is represented as an empty byte array
- Numbers read from the stack are limited to 4 bytes (32 bits) in standard consensus rules
"""
from typing import Union

from scriptexec.core import SCRIPT, ScriptNumTooLongError, NonMinimalEncodingError, ScriptNumError

__all__ = ["encode_scriptnum", "decode_scriptnum", "is_minimally_encoded", "ScriptNum"]

MAX_SCRIPTNUM_BYTES = SCRIPT.MAX_SCRIPTNUM

ByteLike = Union[bytes, bytearray, memoryview]


def encode_scriptnum(value: int) -> bytes:
    """
    Encode an int to Bitcoin Script's minimal signed-magnitude (little-endian) format.
    No width limit is applied, the decoder is responsible for enforcing max size.
    """
    if value == 0:
        return b""

    neg = value < 0
    a = -value if neg else value
    mag = a.to_bytes((a.bit_length() + 7) // 8, "little")

    # The most significant bit of the most significant byte holds the sign
    if mag[-1] & 0x80:
        # Add an extra byte to host the sign bit.
        return mag + (b"\x80" if neg else b"\x00")

    # Reuse top byte: set sign bit in place for negatives.
    if neg:
        return mag[:-1] + bytes([mag[-1] | 0x80])

    return mag


def is_minimally_encoded(data: ByteLike) -> bool:
    """
    Returns True if data is the shortest encoding of its value.

    The last byte may only have its low 7 bits all zero if it is needed to carry the sign, i.e. the byte before it has
    its MSB set. This rejects b'\\x00' and b'\\x80' (zero and negative zero) as well as padded encodings.
    """
    if len(data) == 0:
        return True
    if data[-1] & 0x7f == 0:
        if len(data) == 1 or data[-2] & 0x80 == 0:
            return False
    return True


def decode_scriptnum(data: ByteLike, max_size: int = MAX_SCRIPTNUM_BYTES, require_minimal: bool = False) -> int:
    """
    Parse Bitcoin Script number (little-endian, sign bit in MSB of last byte).

    Raises ScriptNumTooLongError if data is longer than max_size, and NonMinimalEncodingError if require_minimal is set
    and the encoding carries a redundant byte.
    """
    size = len(data)
    if size > max_size:
        raise ScriptNumTooLongError(f"Script number of {size} bytes exceeds max size of {max_size} bytes")

    # Zero case
    if size == 0:
        return 0

    if require_minimal and not is_minimally_encoded(data):
        raise NonMinimalEncodingError(f"Non-minimally encoded script number: {bytes(data).hex()}")

    num = int.from_bytes(data, "little", signed=False)

    # If the sign bit is set in the last byte, interpret as a negative number.
    if data[-1] & 0x80:
        num &= ~(1 << (8 * size - 1))  # Clear sign bit using ~ to reverse bitmask
        num = -num

    return num


class ScriptNum:
    """
    A Python int paired with its scriptnum encoding. The encoding is cached lazily.
    """
    __slots__ = ("_value", "_bytes_cache")

    def __init__(self, value: int):
        # --- Validation --- #
        if not isinstance(value, int) or isinstance(value, bool):
            raise ScriptNumError("ScriptNum value must be an integer")

        self._value = value
        self._bytes_cache = None

    @property
    def value(self) -> int:
        return self._value

    @classmethod
    def from_bytes(cls, data: ByteLike, max_size: int = MAX_SCRIPTNUM_BYTES, require_minimal: bool = False):
        num = cls(decode_scriptnum(data, max_size, require_minimal))
        # Only a minimal encoding is a valid cache for the value
        if is_minimally_encoded(data):
            num._bytes_cache = bytes(data)
        return num

    def to_bytes(self) -> bytes:
        if self._bytes_cache is None:
            self._bytes_cache = encode_scriptnum(self._value)
        return self._bytes_cache

    def _extract_other(self, other: object) -> int:
        if isinstance(other, ScriptNum):
            return other.value
        elif isinstance(other, int):
            return other
        elif isinstance(other, (bytes, bytearray)):
            return decode_scriptnum(other)
        else:
            raise ScriptNumError(f"Incorrect type for ScriptNum comparison: {type(other)}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (ScriptNum, int, bytes, bytearray)):
            return NotImplemented
        return self.value == self._extract_other(other)

    def __lt__(self, other: object) -> bool:
        return self.value < self._extract_other(other)

    def __le__(self, other: object) -> bool:
        return self.value <= self._extract_other(other)

    def __gt__(self, other: object) -> bool:
        return self.value > self._extract_other(other)

    def __ge__(self, other: object) -> bool:
        return self.value >= self._extract_other(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self):
        return f"ScriptNum({self.value})"

    def __str__(self):
        return self.to_bytes().hex()
