"""Time and size formatting for listings.

Handles human-readable sizes, modification-time formatting and the
ISO-8601 timestamps used on the wire.
"""

import math
from datetime import datetime

from .util import UTC


HUMANSIZE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")

DEF_MTIME_FMT = "%Y-%m-%d %H:%M:%S"

def humansize(sz: int) -> str:
    """IEC (1024-based) size; one decimal below ten units, none above"""
    if sz < 10:
        return "%d B" % (sz,)

    n = 0
    div = 1
    while n < len(HUMANSIZE_UNITS) - 1 and sz >= div * 1024:
        div *= 1024
        n += 1

    val = math.floor(sz / float(div) * 10 + 0.5) / 10
    if val >= 1023.5 and n < len(HUMANSIZE_UNITS) - 1:
        # would print as 1024; use the next unit
        div *= 1024
        n += 1
        val = math.floor(sz / float(div) * 10 + 0.5) / 10

    fmt = "%.1f %s" if val < 10 else "%.0f %s"
    return fmt % (val, HUMANSIZE_UNITS[n])


def ts2dt(ts: float) -> datetime:
    """unix timestamp to an aware UTC datetime; negative clamps to epoch"""
    return datetime.fromtimestamp(max(0, ts), UTC)


def fmt_mtime(dt: datetime, fmt: str = DEF_MTIME_FMT) -> str:
    return dt.strftime(fmt or DEF_MTIME_FMT)


def iso8601(dt: datetime) -> str:
    """2026-10-17T12:34:56Z, or 12:34:56.5Z; no trailing zeros in the fraction"""
    dt = dt.astimezone(UTC)
    ret = dt.strftime("%Y-%m-%dT%H:%M:%S")
    if dt.microsecond:
        ret += (".%06d" % (dt.microsecond,)).rstrip("0")
    return ret + "Z"
