"""Data types for the rosout logging topic."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from ros2_client.builtin_interfaces import Time


class LogLevel(enum.IntEnum):
    """ROS 2 logging severity level."""

    FATAL = 50
    ERROR = 40
    WARN = 30
    INFO = 20
    DEBUG = 10


@dataclass
class Log:
    """Log message communicated over the rosout topic."""

    timestamp: Time
    level: int
    name: str
    msg: str
    file: str
    function: str
    line: int

    DEBUG: ClassVar[int] = int(LogLevel.DEBUG)
    INFO: ClassVar[int] = int(LogLevel.INFO)
    WARN: ClassVar[int] = int(LogLevel.WARN)
    ERROR: ClassVar[int] = int(LogLevel.ERROR)
    FATAL: ClassVar[int] = int(LogLevel.FATAL)

    def __post_init__(self) -> None:
        if not 0 <= self.level <= 0xFF:
            raise ValueError(f"log level out of range for an 8-bit field: {self.level}")
        if not 0 <= self.line <= 0xFFFF_FFFF:
            raise ValueError(f"line number out of range for a 32-bit field: {self.line}")