"""
The custom exceptions used throughout scriptexec
"""
__all__ = ["ScriptExecError", "StackError", "StackUnderflowError", "StackContractError", "NumericOverflowError",
           "ScriptNumError", "ScriptNumTooLongError", "NonMinimalEncodingError"]


class ScriptExecError(Exception):
    """
    Parent class for every scriptexec error
    """
    pass


class StackError(ScriptExecError):
    """
    For use in the Stack class
    """
    pass


class StackUnderflowError(StackError):
    """
    Raised when a read or pop reaches beyond the current stack depth
    """

    def __init__(self, message="Not enough elements on stack", required=None, available=None):
        self.required = required
        self.available = available
        if required is not None and available is not None:
            message = f"{message}. Required: {required}, Available: {available}"
        super().__init__(message)


class StackContractError(StackError):
    """
    Raised when the caller breaks a stack precondition: a non-negative top offset, an absolute index out of range,
    or an entry too wide for the 4-byte commitment. Signals a bug in the opcode dispatcher, not in the script.
    """
    pass


class NumericOverflowError(ScriptExecError):
    """
    Raised when a number read from the stack falls outside the 32-bit script window
    """
    pass


class ScriptNumError(ScriptExecError):
    """
    For use in the scriptnum codec
    """
    pass


class ScriptNumTooLongError(ScriptNumError, NumericOverflowError):
    """
    Raised when an encoded number is longer than the allowed max size
    """
    pass


class NonMinimalEncodingError(ScriptNumError):
    """
    Raised when minimal encoding is required and the number carries a redundant byte
    """
    pass
