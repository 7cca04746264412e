"""UltraHonk flavor selector."""

from enum import IntEnum
from typing import Union


class HonkFlavor(IntEnum):
    """Proof-system variant with its fixed calldata code.

    The integer value is the code the calldata generator expects.
    """
    KECCAK = 0
    STARKNET = 1

    @property
    def oracle_hash(self) -> str:
        """Transcript hash name passed to bb --oracle_hash."""
        return self.name.lower()

    @property
    def garaga_system(self) -> str:
        """Proof system name passed to garaga calldata --system."""
        return f"ultra_{self.name.lower()}_honk"

    @classmethod
    def parse(cls, value: Union[str, int, "HonkFlavor"]) -> "HonkFlavor":
        """Resolve a flavor from its name (any case) or integer code."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Unknown flavor code {value}") from None
        name = str(value).strip()
        if name.isdigit():
            return cls.parse(int(name))
        try:
            return cls[name.upper()]
        except KeyError:
            choices = ", ".join(f.name.lower() for f in cls)
            raise ValueError(f"Unknown flavor {value!r} (expected one of: {choices})") from None
