class StreamError(ValueError):
    """base class for contract violations raised by stream operations."""
    pass


class EmptySequenceError(StreamError):
    """an operation that needs at least one value met an empty sequence."""
    pass


class CardinalityError(StreamError):
    """an operation that needs exactly one match found more than one."""
    pass


def require_non_negative(name: str, value: int) -> int:
    """validate a count-like argument at the call site"""
    if value < 0:
        raise ValueError(f"{name} must be 0 or greater but {value} was given")
    return value
