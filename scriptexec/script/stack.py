"""
The execution stack for Bitcoin Script

The stack is a list of StackEntry objects with the bottom at index 0 and the top at the end. Opcodes read it from the
top using negative offsets (-1 is the top item) and address it absolutely from the bottom when removing or viewing
single items.
"""
import json
from typing import Iterable, Iterator, Optional, Sequence

from scriptexec.core import SCRIPT, StackUnderflowError, StackContractError
from scriptexec.core.logging import get_logger
from scriptexec.script.entry import StackEntry, NumEntry, BytesEntry

logger = get_logger(__name__)

COMMITMENT_WIDTH = SCRIPT.COMMITMENT_WIDTH

__all__ = ["Stack", "StackBytesView"]


class StackBytesView:
    """
    A lazy byte view over the stack entries, bottom to top.

    The view holds the entries as they were when it was created. Each item is converted when it is read, so a shared
    buffer mutated after the view was taken is read with its new contents.
    """
    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[StackEntry]):
        self._entries = tuple(entries)

    def __iter__(self) -> Iterator[bytes]:
        return (entry.to_bytes() for entry in self._entries)

    def __reversed__(self) -> Iterator[bytes]:
        return (entry.to_bytes() for entry in reversed(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> bytes:
        return self._entries[index].to_bytes()


class Stack:
    """
    The main execution stack used by the opcode dispatcher
    """

    def __init__(self):
        self._entries: list[StackEntry] = []

    @classmethod
    def from_buffers(cls, buffers: Iterable[bytes]):
        """
        Seed the stack with one BytesEntry per buffer. The first buffer ends up at the bottom of the stack.
        """
        stack = cls()
        for buffer in buffers:
            stack.push_bytes(buffer)
        logger.debug(f"Seeded stack with {stack.height} items")
        return stack

    # --- Stack Properties --- #
    @property
    def height(self) -> int:
        return len(self._entries)

    @property
    def is_empty(self) -> bool:
        return self.height == 0

    # --- Internal Validation --- #
    def _check_offset(self, offset: int):
        if not isinstance(offset, int) or offset >= 0:
            logger.error(f"Top-relative stack offset must be negative. Received: {offset}")
            raise StackContractError(f"Top-relative stack offset must be negative. Received: {offset}")

    def _check_index(self, index: int):
        if not isinstance(index, int) or not 0 <= index < self.height:
            logger.error(f"Stack index {index} out of range for stack of height {self.height}")
            raise StackContractError(f"Stack index {index} out of range for stack of height {self.height}")

    def _pop_entry(self) -> StackEntry:
        if self.is_empty:
            raise StackUnderflowError("Cannot pop from an empty stack", required=1, available=0)
        return self._entries.pop()

    # --- Reads --- #
    def top(self, offset: int = -1) -> StackEntry:
        """
        Returns the entry at the top-relative offset without removing it
        """
        self._check_offset(offset)
        if -offset > self.height:
            raise StackUnderflowError(required=-offset, available=self.height)
        return self._entries[self.height + offset]

    def top_bytes(self, offset: int = -1) -> bytes:
        return self.top(offset).to_bytes()

    def top_number(self, offset: int = -1, require_minimal: bool = False) -> int:
        return self.top(offset).to_number(require_minimal)

    def last(self) -> bytes:
        return self.top_bytes(-1)

    def at(self, index: int) -> bytes:
        """
        Byte view of the entry at absolute index, 0 being the bottom of the stack
        """
        self._check_index(index)
        return self._entries[index].to_bytes()

    def iter_bytes(self) -> StackBytesView:
        return StackBytesView(self._entries)

    def need_at_least(self, n: int):
        if self.height < n:
            raise StackUnderflowError(required=n, available=self.height)

    # --- Pushes --- #
    def push(self, entry: StackEntry):
        """
        Push the entry object itself. A BytesEntry pushed twice shares its buffer between both slots.
        """
        if not isinstance(entry, StackEntry):
            raise TypeError(f"Only StackEntry objects are allowed on the Stack. Received: {type(entry)}")
        self._entries.append(entry)

    def push_number(self, value: int):
        self._entries.append(NumEntry(value))

    def push_bytes(self, data: bytes):
        self._entries.append(BytesEntry.from_bytes(data))

    # --- Pops --- #
    def pop(self) -> Optional[StackEntry]:
        """
        Remove and return the top entry, or None if the stack is empty
        """
        if self.is_empty:
            return None
        return self._entries.pop()

    def pop_n(self, n: int):
        """
        Remove and discard the top n entries. The depth is checked first, so on underflow nothing is removed.
        """
        self.need_at_least(n)
        if n > 0:
            del self._entries[-n:]

    def pop_bytes(self) -> bytes:
        return self._pop_entry().to_bytes()

    def pop_number(self, require_minimal: bool = False) -> int:
        """
        The top entry is removed before conversion, so it is gone even when the conversion fails
        """
        return self._pop_entry().to_number(require_minimal)

    def remove_at(self, index: int):
        """
        Remove the entry at absolute index. Entries above it shift down by one.
        """
        self._check_index(index)
        del self._entries[index]

    # --- Commitment --- #
    def serialize_to_bytes(self) -> bytes:
        """
        Concatenate the 4-byte form of every entry, bottom to top, and drain the stack.

        Every entry is serialized before the stack is cleared, so if one entry is too wide the stack is left as is.
        """
        commitment = b"".join(entry.serialize_to_bytes() for entry in self._entries)
        self._entries.clear()
        return commitment

    # --- Dunder Ops --- #
    def __len__(self) -> int:
        return self.height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stack):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self):
        return f"Stack({self._entries!r})"

    # --- Display --- #
    def to_dict(self) -> dict:
        stack_dict = {}
        for i, entry in enumerate(self._entries):
            # Format data | bytes else number
            item = entry.buffer.hex() if isinstance(entry, BytesEntry) else entry.value
            stack_dict.update({i: item})
        return stack_dict

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
