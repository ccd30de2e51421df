# quantitykit/core/leapseconds.py
# -----------------------------------------------------------------------------
# TAI − UTC (ΔAT) lookup for the UTC time scale
#
# Multi-source strategy:
#   1. Operations override table (QUANTITYKIT_DELTA_AT_JSON)
#   2. ERFA dat() via pyerfa
#   3. Built-in table (IERS, through 2017-01-01)
#
# Before 1960-01-01 UTC did not exist as such; ΔAT is taken as zero.
#
# Public API:
#   delta_at(mjd_utc) -> LeapInfo
#   LEAP_TABLE, LAST_KNOWN_MJD
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
import math
import warnings as py_warnings
from bisect import bisect_right
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Tuple

import erfa

from quantitykit.core.config import load_config

__all__ = [
    "LeapInfo",
    "delta_at",
    "load_override_table",
    "LEAP_TABLE",
    "LAST_KNOWN_MJD",
    "UTC_EPOCH_MJD",
]

log = logging.getLogger(__name__)

# (MJD_UTC at which the value starts to apply, ΔAT seconds)
LEAP_TABLE: Tuple[Tuple[float, float], ...] = (
    (41317.0, 10.0),  # 1972-01-01
    (41499.0, 11.0),  # 1972-07-01
    (41683.0, 12.0),  # 1973-01-01
    (42048.0, 13.0),  # 1974-01-01
    (42413.0, 14.0),  # 1975-01-01
    (42778.0, 15.0),  # 1976-01-01
    (43144.0, 16.0),  # 1977-01-01
    (43509.0, 17.0),  # 1978-01-01
    (43874.0, 18.0),  # 1979-01-01
    (44239.0, 19.0),  # 1980-01-01
    (44786.0, 20.0),  # 1981-07-01
    (45151.0, 21.0),  # 1982-07-01
    (45516.0, 22.0),  # 1983-07-01
    (46247.0, 23.0),  # 1985-07-01
    (47161.0, 24.0),  # 1988-01-01
    (47892.0, 25.0),  # 1990-01-01
    (48257.0, 26.0),  # 1991-01-01
    (48804.0, 27.0),  # 1992-07-01
    (49169.0, 28.0),  # 1993-07-01
    (49534.0, 29.0),  # 1994-07-01
    (50083.0, 30.0),  # 1996-01-01
    (50630.0, 31.0),  # 1997-07-01
    (51179.0, 32.0),  # 1999-01-01
    (53736.0, 33.0),  # 2006-01-01
    (54832.0, 34.0),  # 2009-01-01
    (56109.0, 35.0),  # 2012-07-01
    (57204.0, 36.0),  # 2015-07-01
    (57754.0, 37.0),  # 2017-01-01
)

LAST_KNOWN_MJD = LEAP_TABLE[-1][0]

# 1960-01-01
UTC_EPOCH_MJD = 36934.0

_MJD_ZERO = 2400000.5


@dataclass(frozen=True)
class LeapInfo:
    """ΔAT at an instant and where the value came from."""
    delta_at: float
    source: str          # "override" | "erfa" | "builtin" | "pre-utc"
    mjd_utc: float
    notes: Optional[str] = None


def _mjd_to_two_part_jd(mjd: float) -> Tuple[float, float]:
    jd = mjd + _MJD_ZERO
    jd1 = math.floor(jd + 0.5) - 0.5
    return jd1, jd - jd1


def _lookup(mjd_utc: float, table: Tuple[Tuple[float, float], ...]) -> Optional[float]:
    """Step-function lookup; None before the first row."""
    idx = bisect_right([row[0] for row in table], mjd_utc)
    if idx == 0:
        return None
    return table[idx - 1][1]


# ───────────────────────────── Sources ─────────────────────────────

@lru_cache(maxsize=8)
def load_override_table(path: str) -> Optional[Tuple[Tuple[float, float], ...]]:
    """Read an operations override table (JSON list of ``{"mjd", "delta_at"}``).

    A table that cannot be read or parsed is reported with a warning and
    ignored, so lookups fall through to the next source.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        steps: List[Tuple[float, float]] = [
            (float(row["mjd"]), float(row["delta_at"])) for row in data
        ]
    except (OSError, ValueError, KeyError, TypeError) as e:
        log.warning("ignoring leap second override table %s: %s", path, e)
        py_warnings.warn(f"Failed to load leap second override table: {e}")
        return None

    if not steps:
        log.warning("leap second override table %s is empty", path)
        return None
    steps.sort(key=lambda t: t[0])
    log.debug("loaded %d leap second override rows from %s", len(steps), path)
    return tuple(steps)


def _erfa_delta_at(mjd_utc: float) -> Optional[float]:
    jd1, jd2 = _mjd_to_two_part_jd(mjd_utc)
    try:
        # ERFA flags years beyond its own table as dubious; the value it
        # returns is still the latest known offset.
        with py_warnings.catch_warnings():
            py_warnings.simplefilter("ignore", erfa.ErfaWarning)
            iy, im, iday, fd = erfa.jd2cal(jd1, jd2)
            return float(erfa.dat(iy, im, iday, fd))
    except erfa.ErfaError as e:
        log.debug("erfa.dat failed at MJD %s: %s", mjd_utc, e)
        return None


# ───────────────────────────── Lookup ─────────────────────────────

def delta_at(mjd_utc: float) -> LeapInfo:
    """TAI − UTC in seconds at the given UTC modified Julian date."""
    if not math.isfinite(mjd_utc):
        raise ValueError(f"mjd_utc must be finite, got {mjd_utc}")

    if mjd_utc < UTC_EPOCH_MJD:
        return LeapInfo(0.0, "pre-utc", mjd_utc)

    path = load_config().delta_at_json
    if path:
        table = load_override_table(path)
        if table is not None:
            value = _lookup(mjd_utc, table)
            if value is not None:
                return LeapInfo(value, "override", mjd_utc)

    value = _erfa_delta_at(mjd_utc)
    if value is not None:
        return LeapInfo(value, "erfa", mjd_utc)

    value = _lookup(mjd_utc, LEAP_TABLE)
    if value is None:
        # 1960-1971 drift era is only modelled by ERFA
        return LeapInfo(0.0, "builtin", mjd_utc, notes="before 1972 table start")
    notes = None
    if mjd_utc - LAST_KNOWN_MJD > 183.0:
        notes = f"{mjd_utc - LAST_KNOWN_MJD:.0f} days past last known leap second"
    return LeapInfo(value, "builtin", mjd_utc, notes=notes)
