"""
The classes for a single slot of the execution stack

A StackEntry is either
    -NumEntry: a native integer pushed directly by an opcode
    -BytesEntry: a reference to a shared, mutable byte buffer

Several BytesEntry objects may reference the same bytearray. Writing to the buffer through one of them is seen by all
of them, which is what makes duplicating a byte operand cheap. Call make_unique() before mutating a buffer that must
not be seen by the other slots.
"""
from abc import ABC, abstractmethod

from scriptexec.core import SCRIPT, NumericOverflowError, StackContractError
from scriptexec.core.logging import get_logger
from scriptexec.script.scriptnum import encode_scriptnum, decode_scriptnum

logger = get_logger(__name__)

MAX_SCRIPTNUM_BYTES = SCRIPT.MAX_SCRIPTNUM
MAX_INT32 = SCRIPT.MAX_INT32
MAX_UINT32 = SCRIPT.MAX_UINT32
COMMITMENT_WIDTH = SCRIPT.COMMITMENT_WIDTH

__all__ = ["StackEntry", "NumEntry", "BytesEntry"]


class StackEntry(ABC):
    """
    Shared conversion interface for the two stack entry types
    """
    __slots__ = ()

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Byte view of the entry, as read by byte-consuming opcodes"""

    @abstractmethod
    def to_number(self, require_minimal: bool = False) -> int:
        """Numeric view of the entry, limited to the 32-bit script window"""

    @abstractmethod
    def serialize_to_bytes(self) -> bytes:
        """Fixed 4-byte little-endian form used in the stack commitment"""


class NumEntry(StackEntry):
    __slots__ = ("_value",)

    def __init__(self, value: int):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"NumEntry value must be an integer. Received: {type(value)}")
        self._value = value

    @property
    def value(self) -> int:
        return self._value

    def to_bytes(self) -> bytes:
        return encode_scriptnum(self._value)

    def to_number(self, require_minimal: bool = False) -> int:
        """
        Only the upper bound of the signed 32-bit window is enforced. Values below -(2^31 - 1) are returned as is.
        """
        if self._value > MAX_INT32:
            raise NumericOverflowError(f"Stack number {self._value} exceeds the 32-bit script window")
        return self._value

    def serialize_to_bytes(self) -> bytes:
        """
        The value is truncated to an unsigned 32-bit word, so negative values wrap around.
        """
        if self._value > MAX_UINT32:
            logger.error(f"NumEntry {self._value} does not fit in the {COMMITMENT_WIDTH}-byte stack commitment")
            raise StackContractError(f"Stack number {self._value} is wider than 32 bits")
        return (self._value & MAX_UINT32).to_bytes(COMMITMENT_WIDTH, "little")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StackEntry):
            return NotImplemented
        return isinstance(other, NumEntry) and self._value == other.value

    def __hash__(self) -> int:
        return hash(self._value)

    def __repr__(self):
        return f"NumEntry({self._value})"


class BytesEntry(StackEntry):
    __slots__ = ("_buffer",)

    def __init__(self, buffer: bytearray):
        """
        The buffer is referenced, not copied. Use BytesEntry.from_bytes to get an entry with its own buffer.
        """
        if not isinstance(buffer, bytearray):
            raise TypeError(f"BytesEntry expects a bytearray buffer. Received: {type(buffer)}")
        self._buffer = buffer

    @classmethod
    def from_bytes(cls, data: bytes):
        return cls(bytearray(data))

    @property
    def buffer(self) -> bytearray:
        return self._buffer

    def share(self) -> "BytesEntry":
        """
        Returns a new entry referencing the same buffer
        """
        return BytesEntry(self._buffer)

    def make_unique(self) -> "BytesEntry":
        """
        Returns a new entry with a private copy of the buffer (copy-on-write)
        """
        return BytesEntry(bytearray(self._buffer))

    def is_shared_with(self, other: "BytesEntry") -> bool:
        return self._buffer is other.buffer

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)

    def to_number(self, require_minimal: bool = False) -> int:
        return decode_scriptnum(self._buffer, MAX_SCRIPTNUM_BYTES, require_minimal)

    def serialize_to_bytes(self) -> bytes:
        if len(self._buffer) > COMMITMENT_WIDTH:
            logger.error(f"BytesEntry of {len(self._buffer)} bytes does not fit in the stack commitment")
            raise StackContractError(f"Stack item {self._buffer.hex()} is wider than {COMMITMENT_WIDTH} bytes")
        return bytes(self._buffer).ljust(COMMITMENT_WIDTH, b"\x00")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StackEntry):
            return NotImplemented
        return isinstance(other, BytesEntry) and self._buffer == other.buffer

    # Buffer is mutable
    __hash__ = None

    def __repr__(self):
        return f"BytesEntry({self._buffer.hex()})"
