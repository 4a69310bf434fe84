"""
The Bitcoin Script formats used by the execution stack
"""
from typing import Final

__all__ = ["SCRIPT"]


class SCRIPT:
    """
    Constants in use in the Script execution stack
    """
    MAX_SCRIPTNUM: Final[int] = 4  # Max byte length of a number read from the stack
    MAX_INT32: Final[int] = 0x7fffffff
    MAX_UINT32: Final[int] = 0xffffffff
    COMMITMENT_WIDTH: Final[int] = 4  # Bytes per entry when flattening the stack
    DEFAULT_LOG_LEVEL: Final[str] = "INFO"
    COMMON_VALUES: Final[dict] = {
        0: b'',
        -1: b'\x81'
    }
