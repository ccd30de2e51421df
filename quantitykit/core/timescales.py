# quantitykit/core/timescales.py
# -----------------------------------------------------------------------------
# Time-instant units
#
# Base representation: seconds of International Atomic Time since
# 1958-01-01T00:00:00 TAI (JD 2436204.5). Every time scale is a unit over
# that base:
#
#   affine        TAI, TT (TDT, ET), GPST, JD/MJD of TAI
#   closed form   TCG, UT2, Besselian epoch, NTP, system time, UTC,
#                 JD/MJD of UTC, UT1, TT, TDB, TCB and TCG
#   searched      TDB, TCB (correction depends on the unknown TAI),
#                 UT1 (Delta T depends on the unknown TAI)
#
# TDB − TT is the Fairhead & Bretagnon series from ERFA (pyerfa dtdb).
# TAI − UTC comes from quantitykit.core.leapseconds.
#
# Public API:
#   tdb_from_tai(), tcb_from_tai(), tcg_from_tai(), ut1_from_tai(), ...
#   delta_t(tai_seconds) -> float
#   TAI, UTC, TT, TDT, ET, GPST, TCG, TDB, TB, TCB, UT1, UT2, B, NTP, SYSTEM,
#   JD_TAI, MJD_TAI, JD_UTC, MJD_UTC, JD_UT1, MJD_UT1, JD_TT, MJD_TT,
#   JD_TDB, MJD_TDB, JD_TCG, MJD_TCG, JD_TCB, MJD_TCB, J2000
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import math
from bisect import bisect_right
from typing import Callable, Tuple

import erfa

from quantitykit.core.config import load_config
from quantitykit.core.inverter import damped_search
from quantitykit.core.leapseconds import delta_at
from quantitykit.core.numbers import Double, Number
from quantitykit.core.units import UnitDefinition, searched_unit

__all__ = [
    # Functions over TAI seconds
    "delta_t",
    "utc_from_tai",
    "tai_from_utc",
    "tcg_from_tai",
    "tai_from_tcg",
    "tdb_from_tai",
    "tcb_from_tai",
    "ut1_from_tai",
    "tai_from_ut1",
    "besselian_from_tai",
    "tai_from_besselian",
    # Units
    "TAI", "UTC", "TT", "TDT", "ET", "GPST", "TCG", "TDB", "TB", "TCB",
    "UT1", "UT2", "B", "NTP", "SYSTEM",
    "JD_TAI", "MJD_TAI", "JD_UTC", "MJD_UTC", "JD_UT1", "MJD_UT1",
    "JD_TT", "MJD_TT", "JD_TDB", "MJD_TDB", "JD_TCG", "MJD_TCG",
    "JD_TCB", "MJD_TCB",
    "J2000",
]

log = logging.getLogger(__name__)

# ───────────────────────────── Constants ─────────────────────────────

SECONDS_PER_DAY = 86400.0
JD_EPOCH = 2436204.5            # 1958-01-01T00:00:00 TAI
MJD_EPOCH = 36204.0
MJD_ZERO = 2400000.5
TT_MINUS_TAI = 32.184
TAI_MINUS_GPST = 19.0
JD_J2000 = 2451545.0

NTP_OFFSET = 1830297600.0       # 1900-01-01 -> 1958-01-01
UNIX_OFFSET = 378691200.0       # 1958-01-01 -> 1970-01-01

# 1977-01-01T00:00:00 TAI in base seconds
T0_1977 = 599616000.0
L_G = 6.969291e-10
L_B = 1.550505e-8

BESSELIAN_JD_1900 = 2415020.31352
TROPICAL_YEAR_DAYS = 365.242198781
JULIAN_YEAR_SECONDS = 365.25 * SECONDS_PER_DAY

# ───────────────────────────── Delta T ─────────────────────────────

# (decimal year, TT − UT1 seconds)
DELTA_T_TABLE: Tuple[Tuple[float, float], ...] = (
    (1800.0, 13.7),
    (1820.0, 12.0),
    (1840.0, 5.7),
    (1860.0, 7.6),
    (1880.0, -5.4),
    (1900.0, -2.79),
    (1905.0, 3.86),
    (1910.0, 10.46),
    (1915.0, 17.20),
    (1920.0, 21.16),
    (1925.0, 23.62),
    (1930.0, 24.02),
    (1935.0, 23.93),
    (1940.0, 24.33),
    (1945.0, 26.77),
    (1950.0, 29.15),
    (1955.0, 31.07),
    (1960.0, 33.15),
    (1965.0, 35.73),
    (1970.0, 40.18),
    (1975.0, 45.48),
    (1980.0, 50.54),
    (1985.0, 54.34),
    (1990.0, 56.86),
    (1995.0, 60.78),
    (2000.0, 63.83),
    (2005.0, 64.69),
    (2010.0, 66.07),
    (2015.0, 67.64),
    (2020.0, 69.36),
    (2025.0, 69.14),
)

_DELTA_T_YEARS = [row[0] for row in DELTA_T_TABLE]


def _long_term_parabola(year: float) -> float:
    """Morrison & Stephenson long-term Delta T."""
    u = (year - 1820.0) / 100.0
    return -20.0 + 32.0 * u * u


def _year_of(tai_seconds: float) -> float:
    return 1958.0 + tai_seconds / JULIAN_YEAR_SECONDS


def delta_t(tai_seconds: float) -> float:
    """TT − UT1 in seconds at an instant given in base (TAI) seconds.

    Linear interpolation inside the table; outside it the long-term
    parabola, shifted to meet the table end it extends.
    """
    year = _year_of(tai_seconds)
    first_year, first_value = DELTA_T_TABLE[0]
    last_year, last_value = DELTA_T_TABLE[-1]

    if year <= first_year:
        return _long_term_parabola(year) - _long_term_parabola(first_year) + first_value
    if year >= last_year:
        return _long_term_parabola(year) - _long_term_parabola(last_year) + last_value

    idx = bisect_right(_DELTA_T_YEARS, year)
    y0, v0 = DELTA_T_TABLE[idx - 1]
    y1, v1 = DELTA_T_TABLE[idx]
    return v0 + (v1 - v0) * (year - y0) / (y1 - y0)


# ───────────────────────────── Closed Forms ─────────────────────────────

def _mjd_from_seconds(seconds: float) -> float:
    return MJD_EPOCH + seconds / SECONDS_PER_DAY


def tai_from_utc(utc_seconds: float) -> float:
    return utc_seconds + delta_at(_mjd_from_seconds(utc_seconds)).delta_at


def utc_from_tai(tai_seconds: float) -> float:
    """Two-pass fixed point: ΔAT is looked up at the UTC instant."""
    utc = tai_seconds - delta_at(_mjd_from_seconds(tai_seconds)).delta_at
    return tai_seconds - delta_at(_mjd_from_seconds(utc)).delta_at


def tcg_from_tai(tai_seconds: float) -> float:
    return tai_seconds + TT_MINUS_TAI + L_G * (tai_seconds - T0_1977)


def tai_from_tcg(tcg_seconds: float) -> float:
    approx = tcg_seconds - TT_MINUS_TAI - L_G * (tcg_seconds - T0_1977)
    return tcg_seconds - TT_MINUS_TAI - L_G * (approx - T0_1977)


def tdb_from_tai(tai_seconds: float) -> float:
    """TDB seconds since the epoch; TDB − TT from ERFA dtdb (geocentre)."""
    tt_seconds = tai_seconds + TT_MINUS_TAI
    tt_days = tt_seconds / SECONDS_PER_DAY
    ut_fraction = tt_days - math.floor(tt_days)
    return tt_seconds + float(erfa.dtdb(JD_EPOCH, tt_days, ut_fraction, 0.0, 0.0, 0.0))


def tcb_from_tai(tai_seconds: float) -> float:
    return tdb_from_tai(tai_seconds) + L_B * (tai_seconds - T0_1977)


def ut1_from_tai(tai_seconds: float) -> float:
    return tai_seconds + TT_MINUS_TAI - delta_t(tai_seconds)


def tai_from_ut1(ut1_seconds: float) -> float:
    """Damped search with the coarse settings; Delta T is only known to ~1 ms."""
    config = load_config()
    result = damped_search(
        ut1_from_tai,
        ut1_seconds,
        seed=ut1_seconds - TT_MINUS_TAI + delta_t(ut1_seconds),
        epsilon=config.coarse_epsilon,
        max_iterations=config.coarse_max_iterations,
    )
    return result.value


def besselian_from_tai(tai_seconds: float) -> float:
    jd = JD_EPOCH + tai_seconds / SECONDS_PER_DAY
    return 1900.0 + (jd - BESSELIAN_JD_1900) / TROPICAL_YEAR_DAYS


def tai_from_besselian(epoch: float) -> float:
    jd = (epoch - 1900.0) * TROPICAL_YEAR_DAYS + BESSELIAN_JD_1900
    return (jd - JD_EPOCH) * SECONDS_PER_DAY


def _seasonal(besselian: float) -> float:
    """UT2 − UT1 seasonal variation."""
    two_pi_t = 2.0 * math.pi * besselian
    return (
        0.022 * math.sin(two_pi_t)
        - 0.012 * math.cos(two_pi_t)
        - 0.006 * math.sin(2.0 * two_pi_t)
        + 0.007 * math.cos(2.0 * two_pi_t)
    )


def _ut2_from_tai(tai_seconds: float) -> float:
    return ut1_from_tai(tai_seconds) + _seasonal(besselian_from_tai(tai_seconds))


def _tai_from_ut2(ut2_seconds: float) -> float:
    # The UT2 value stands in for UT1 when evaluating the seasonal term
    t = besselian_from_tai(tai_from_ut1(ut2_seconds))
    return tai_from_ut1(ut2_seconds - _seasonal(t))


# ───────────────────────────── Unit Builders ─────────────────────────────

def _closed_unit(
    name: str,
    symbols: Tuple[str, ...],
    to_base_fn: Callable[[float], float],
    from_base_fn: Callable[[float], float],
    *,
    scale_factor: float = 1.0,
    offset: float = 0.0,
) -> UnitDefinition:
    """Unit with closed-form converters in both directions."""
    def forward(value: Number) -> Number:
        return Double(to_base_fn(value.to_double()))

    def inverse(value: Number) -> Number:
        return Double(from_base_fn(value.to_double()))

    return UnitDefinition(
        name=name,
        symbols=symbols,
        scale_factor=Double(scale_factor),
        offset=Double(offset),
        forward_converter=forward,
        inverse_converter=inverse,
    )


def _julian_pair(
    label: str,
    seconds_from_tai: Callable[[float], float],
    tai_from_seconds: Callable[[float], float],
) -> Tuple[UnitDefinition, UnitDefinition]:
    """JD and MJD units over a time scale measured in seconds since the epoch."""
    jd = _closed_unit(
        f"Julian Date ({label})",
        (f"JD({label})",),
        lambda v: tai_from_seconds((v - JD_EPOCH) * SECONDS_PER_DAY),
        lambda s: JD_EPOCH + seconds_from_tai(s) / SECONDS_PER_DAY,
        scale_factor=SECONDS_PER_DAY,
        offset=-JD_EPOCH,
    )
    mjd = _closed_unit(
        f"Modified Julian Date ({label})",
        (f"MJD({label})",),
        lambda v: tai_from_seconds((v - MJD_EPOCH) * SECONDS_PER_DAY),
        lambda s: MJD_EPOCH + seconds_from_tai(s) / SECONDS_PER_DAY,
        scale_factor=SECONDS_PER_DAY,
        offset=-MJD_EPOCH,
    )
    return jd, mjd


# ───────────────────────────── Units ─────────────────────────────

TAI = UnitDefinition(
    name="International Atomic Time",
    symbols=("TAI",),
    metric_base=True,
)

TT = UnitDefinition(
    name="Terrestrial Time",
    symbols=("TT", "TDT"),
    offset=Double(-TT_MINUS_TAI),
)
TDT = TT
ET = TT

GPST = UnitDefinition(
    name="GPS Satellite Time",
    symbols=("GPST",),
    offset=Double(TAI_MINUS_GPST),
)

UTC = _closed_unit("Coordinated Universal Time", ("UTC",), tai_from_utc, utc_from_tai)

TCG = _closed_unit("Geocentric Coordinate Time", ("TCG",), tai_from_tcg, tcg_from_tai)

TDB = searched_unit(
    "Barycentric Dynamical Time",
    tdb_from_tai,
    symbols=("TDB",),
    offset=-TT_MINUS_TAI,
)
TB = TDB

TCB = searched_unit(
    "Barycentric Coordinate Time",
    tcb_from_tai,
    symbols=("TCB",),
    scale_factor=1.0 - L_B,
    offset=-TT_MINUS_TAI,
    seed=lambda tcb: tcb - TT_MINUS_TAI - L_B * (tcb - T0_1977),
)

UT1 = _closed_unit("Universal Time (UT1)", ("UT1",), tai_from_ut1, ut1_from_tai)

UT2 = _closed_unit("Universal Time (UT2)", ("UT2",), _tai_from_ut2, _ut2_from_tai)

B = _closed_unit("Besselian Epoch", ("B",), tai_from_besselian, besselian_from_tai)

NTP = _closed_unit(
    "Network Time Protocol",
    ("NTP",),
    lambda ntp: tai_from_utc(ntp - NTP_OFFSET),
    lambda tai: utc_from_tai(tai) + NTP_OFFSET,
    offset=-NTP_OFFSET,
)

SYSTEM = _closed_unit(
    "System Time",
    ("ms",),
    lambda ms: tai_from_utc(ms / 1000.0 + UNIX_OFFSET),
    lambda tai: (utc_from_tai(tai) - UNIX_OFFSET) * 1000.0,
    scale_factor=1e-3,
    offset=UNIX_OFFSET * 1000.0,
)

JD_TAI = UnitDefinition(
    name="Julian Date (TAI)",
    symbols=("JD(TAI)",),
    scale_factor=Double(SECONDS_PER_DAY),
    offset=Double(-JD_EPOCH),
)

MJD_TAI = UnitDefinition(
    name="Modified Julian Date (TAI)",
    symbols=("MJD(TAI)",),
    scale_factor=Double(SECONDS_PER_DAY),
    offset=Double(-MJD_EPOCH),
)

JD_UTC, MJD_UTC = _julian_pair("UTC", utc_from_tai, tai_from_utc)
JD_UT1, MJD_UT1 = _julian_pair("UT1", ut1_from_tai, tai_from_ut1)
JD_TT, MJD_TT = _julian_pair(
    "TT",
    lambda tai: tai + TT_MINUS_TAI,
    lambda tt: tt - TT_MINUS_TAI,
)
JD_TDB, MJD_TDB = _julian_pair("TDB", tdb_from_tai, lambda s: TDB.to_base(s).to_double())
JD_TCG, MJD_TCG = _julian_pair("TCG", tcg_from_tai, tai_from_tcg)
JD_TCB, MJD_TCB = _julian_pair("TCB", tcb_from_tai, lambda s: TCB.to_base(s).to_double())

# J2000.0: 2000-01-01T12:00:00 TT, in base seconds
J2000: Number = JD_TT.to_base(JD_J2000)
