"""Over-the-wire ``Time`` and ``Duration`` message types.

In memory a timestamp is a signed 64-bit count of nanoseconds since the Unix
epoch. On the wire it is a signed 32-bit seconds field plus an unsigned
nanoseconds field, so serialization saturates in the year 2038.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import ClassVar

logger = logging.getLogger(__name__)

_NANOS_PER_SEC = 1_000_000_000
_I32_MAX = 2**31 - 1
_I32_MIN = -(2**31)
_U32_MAX = 2**32 - 1


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    """Divide rounding toward zero; the remainder takes the sign of ``value``."""
    quot = abs(value) // divisor
    if value < 0:
        quot = -quot
    return quot, value - quot * divisor


@dataclass(frozen=True)
class WireTime:
    """Wire representation of a timestamp: whole seconds and a non-negative fraction."""

    sec: int
    nanosec: int


@dataclass(frozen=True, order=True)
class Time:
    """A timestamp in nanoseconds since the Unix epoch."""

    nanos_since_epoch: int

    ZERO: ClassVar[Time]
    DUMMY: ClassVar[Time]

    @classmethod
    def now(cls) -> Time:
        """Return the current time of the system clock."""
        return cls(time.time_ns())

    @classmethod
    def from_nanos(cls, nanos_since_epoch: int) -> Time:
        return cls(nanos_since_epoch)

    def to_nanos(self) -> int:
        return self.nanos_since_epoch

    def to_wire(self) -> WireTime:
        """Convert to the wire form, saturating seconds to the 32-bit range."""
        quot, rem = _trunc_divmod(self.nanos_since_epoch, _NANOS_PER_SEC)
        if rem >= 0:
            if quot > _I32_MAX:
                logger.warning("builtin_interfaces Time conversion overflow")
                sec = _I32_MAX
            elif quot < _I32_MIN:
                logger.warning("builtin_interfaces Time conversion underflow")
                sec = _I32_MIN
            else:
                sec = quot
            return WireTime(sec, rem)

        # Negative time with a non-zero fraction: borrow one whole second so
        # that the fractional part becomes positive.
        if quot >= _I32_MIN:
            quot_sat = quot
        else:
            logger.warning("builtin_interfaces Time conversion underflow")
            quot_sat = _I32_MIN
        sec = quot_sat - 1
        if sec < _I32_MIN:
            logger.warning("builtin_interfaces Time conversion underflow")
            sec = _I32_MIN
        return WireTime(sec, _NANOS_PER_SEC + rem)

    @classmethod
    def from_wire(cls, wire: WireTime) -> Time:
        """Convert from the wire form. Works for both positive and negative times."""
        if wire.nanosec >= _NANOS_PER_SEC:
            logger.warning(
                "builtin_interfaces Time fractional part at 1 or greater: %d / 10^9",
                wire.nanosec,
            )
        return cls(wire.sec * _NANOS_PER_SEC + wire.nanosec)


Time.ZERO = Time(0)
Time.DUMMY = Time(1234567890123)


@dataclass(frozen=True)
class Duration:
    """Wire representation of a difference between two timestamps."""

    sec: int
    nanosec: int

    @classmethod
    def zero(cls) -> Duration:
        return cls(0, 0)

    @classmethod
    def from_secs(cls, sec: int) -> Duration:
        return cls(sec, 0)

    @classmethod
    def from_millis(cls, millis: int) -> Duration:
        return cls.from_nanos(millis * 1_000_000)

    @classmethod
    def from_nanos(cls, nanos: int) -> Duration:
        """Split a nanosecond count into seconds and nanoseconds, saturating on overflow."""
        quot, rem = _trunc_divmod(nanos, _NANOS_PER_SEC)
        if rem >= 0:
            if quot > _I32_MAX:
                return cls(_I32_MAX, _U32_MAX)
            if quot <= _I32_MIN:
                return cls(_I32_MIN, 0)
            return cls(quot, rem)
        if quot <= _I32_MIN:
            return cls(_I32_MIN, 0)
        return cls(quot + 1, _NANOS_PER_SEC + rem)

    def to_nanos(self) -> int:
        return _NANOS_PER_SEC * self.sec + self.nanosec