"""Error taxonomy for the calldata pipeline.

Every error also derives from the closest built-in exception so callers that
only know about ValueError / TypeError keep working.
"""

from typing import Optional, Sequence


class CalldataError(Exception):
    """Base class for all pipeline errors."""


class InvalidHexInput(CalldataError, ValueError):
    """A field-element string contains a non-hex character."""

    def __init__(self, value: object, position: Optional[int] = None) -> None:
        self.value = value
        self.position = position
        if position is None:
            msg = f"Expected a hex string, got {type(value).__name__}: {value!r}"
        else:
            msg = (f"Invalid hex character {str(value)[position]!r} at position "
                   f"{position} in {value!r}")
        super().__init__(msg)


class CapacityExceeded(CalldataError, OverflowError):
    """Flattening would exceed the addressable buffer size."""

    def __init__(self, total: int, limit: int) -> None:
        self.total = total
        self.limit = limit
        super().__init__(f"Flattened length {total} exceeds addressable size {limit}")


class MalformedArtifact(CalldataError, TypeError):
    """A proof or VK result matches neither the raw nor the wrapped shape.

    Attributes:
        type_name: Type name of the offending artifact
        fields: Field names the artifact exposes (empty for opaque values)
        reason: Short description of what was expected
    """

    def __init__(self, type_name: str, fields: Sequence[str] = (), reason: str = "") -> None:
        self.type_name = type_name
        self.fields = list(fields)
        self.reason = reason
        msg = f"Malformed artifact of type {type_name} (fields: {self.fields})"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class BackendError(CalldataError, RuntimeError):
    """An external tool (nargo, bb, garaga) failed."""

    def __init__(self, command: Sequence[str], returncode: Optional[int], stderr: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"Could not run {self.command[0]!r}"
        else:
            msg = f"{' '.join(self.command)} exited with status {returncode}"
        if stderr:
            msg += f": {stderr.strip()}"
        super().__init__(msg)
