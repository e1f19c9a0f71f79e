"""Global identifier of a DDS entity as used by ROS 2 discovery."""

from __future__ import annotations

from dataclasses import dataclass

GID_LENGTH = 16
GUID_LENGTH = 16


@dataclass(frozen=True, order=True)
class Gid:
    """ROS 2 equivalent of a DDS GUID: a fixed-length byte string."""

    data: bytes

    def __post_init__(self) -> None:
        data = bytes(self.data)
        if len(data) != GID_LENGTH:
            raise ValueError(f"Gid must be {GID_LENGTH} bytes, got {len(data)}")
        object.__setattr__(self, "data", data)

    def __str__(self) -> str:
        return self.data.hex()

    @classmethod
    def from_guid_bytes(cls, data: bytes) -> Gid:
        """Build from GUID bytes, truncating or zero-padding to the Gid length."""
        raw = bytes(data)[:GID_LENGTH]
        return cls(raw.ljust(GID_LENGTH, b"\x00"))

    def to_guid_bytes(self) -> bytes:
        """Return the bytes of the corresponding DDS GUID."""
        return self.data[:GUID_LENGTH]