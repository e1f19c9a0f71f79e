"""Example service request and response message types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

_INTEGER_RANGES = {
    "char_value": (0, 2**8 - 1),
    "int8_value": (-(2**7), 2**7 - 1),
    "uint8_value": (0, 2**8 - 1),
    "int16_value": (-(2**15), 2**15 - 1),
    "uint16_value": (0, 2**16 - 1),
    "int32_value": (-(2**31), 2**31 - 1),
    "uint32_value": (0, 2**32 - 1),
    "int64_value": (-(2**63), 2**63 - 1),
    "uint64_value": (0, 2**64 - 1),
}


@dataclass
class _BasicTypes:
    bool_value: bool = False
    byte_value: bytes = b""
    char_value: int = 0
    float32_value: float = 0.0
    float64_value: float = 0.0
    int8_value: int = 0
    uint8_value: int = 0
    int16_value: int = 0
    uint16_value: int = 0
    int32_value: int = 0
    uint32_value: int = 0
    int64_value: int = 0
    uint64_value: int = 0
    string_value: str = ""

    _DEMO_TEXT: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self.byte_value = bytes(self.byte_value)
        for name, (low, high) in _INTEGER_RANGES.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise ValueError(f"{name} out of range [{low}, {high}]: {value}")

    @classmethod
    def demo(cls):
        """An instance with ``bool_value`` set and a greeting in ``string_value``."""
        return cls(bool_value=True, string_value=cls._DEMO_TEXT)


@dataclass
class BasicTypesRequest(_BasicTypes):
    """Request carrying one value of each basic type."""

    _DEMO_TEXT: ClassVar[str] = "From RustDDS service, this a Request"


@dataclass
class BasicTypesResponse(_BasicTypes):
    """Response carrying one value of each basic type."""

    _DEMO_TEXT: ClassVar[str] = "From RustDDS service, this a Response"


@dataclass
class MarkerRequest:
    marker: str


@dataclass
class MarkerResponse:
    marker: str