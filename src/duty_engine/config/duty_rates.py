"""Duty-rate schedules and the current Vehicle Duty Order reference table."""

import math

from pydantic import BaseModel, Field, field_validator


def sort_by_year(schedule: dict[int, float]) -> dict[int, float]:
    """Return ``schedule`` with its integer year keys in ascending order."""
    return dict(sorted(schedule.items()))


class DutyRates(BaseModel):
    """Scenario duty schedules.

    Both mappings are sparse: a year that is not listed inherits the most
    recent earlier year.  Year keys arriving as strings (``"2030"``) are
    coerced to ``int``.
    """

    ev: dict[int, float] = Field(
        default_factory=dict,
        description="Year → annual EV duty. Years before the first entry fall "
                    "back to the baseline average EV duty.",
    )
    ice_bands: dict[str, dict[int, float]] = Field(
        default_factory=dict,
        description="Emission band → (year → annual duty). Recorded for reporting "
                    "only; ICE revenue is priced at the baseline average ICE duty.",
    )

    @field_validator("ev")
    @classmethod
    def _sort_ev(cls, v: dict[int, float]) -> dict[int, float]:
        for year, rate in v.items():
            if rate < 0:
                raise ValueError(f"EV duty for {year} must be non-negative, got {rate}")
        return sort_by_year(v)

    @field_validator("ice_bands")
    @classmethod
    def _sort_bands(cls, v: dict[str, dict[int, float]]) -> dict[str, dict[int, float]]:
        return {band: sort_by_year(rates) for band, rates in sorted(v.items())}


# ═══════════════════════════════════════════════════════════════════════════
# Reference schedule — Vehicle Duty Order 2023 (effective 1 April 2023)
# ═══════════════════════════════════════════════════════════════════════════

class EmissionBand(BaseModel):
    """One row of the emission-band duty table."""

    co2_range: str
    annual: float
    six_month: float
    description: str = ""


SIX_MONTH_ADMIN_CHARGE = 6.0
"""Added to half the annual rate when duty is paid six-monthly."""

AVERAGE_ICE_DUTY = 230.0
AVERAGE_EV_DUTY = 65.0
EV_FLAT_RATE_ANNUAL = 65.0


def six_month_payment(annual: float) -> float:
    """Six-monthly instalment: half the annual rate plus the admin charge,
    rounded up to the whole pound."""
    return float(math.ceil(annual / 2 + SIX_MONTH_ADMIN_CHARGE))


def _band(co2_range: str, annual: float, description: str = "") -> EmissionBand:
    return EmissionBand(
        co2_range=co2_range,
        annual=annual,
        six_month=six_month_payment(annual),
        description=description,
    )


EMISSION_BANDS: dict[str, EmissionBand] = {
    "ZEV": _band("0", EV_FLAT_RATE_ANNUAL, "Zero emissions"),
    "A": _band("0-50", 65),
    "B": _band("51-75", 65),
    "C": _band("76-100", 65),
    "D": _band("101-110", 65),
    "E": _band("111-120", 79),
    "F": _band("121-130", 169),
    "G": _band("131-140", 203),
    "H": _band("141-150", 235),
    "I": _band("151-165", 268),
    "J": _band("166-175", 302),
    "K": _band("176-185", 336),
    "L": _band("186-200", 394),
    "M": _band("201-225", 410),
    "N": _band("226-255", 700),
    "O": _band("256+", 724),
}


def duty_for_emission_band(band: str) -> float:
    """Annual duty for ``band``; unknown bands get the average ICE duty."""
    entry = EMISSION_BANDS.get(band)
    return entry.annual if entry is not None else AVERAGE_ICE_DUTY


def reference_schedule() -> dict:
    """JSON-ready dump of the reference table for API consumers."""
    ev_annual = duty_for_emission_band("ZEV")
    return {
        "source": "Vehicle Duty Order 2023",
        "effective_date": "2023-04-01",
        "currency": "GBP",
        "ev_flat_rate": {
            "annual": ev_annual,
            "six_month": six_month_payment(ev_annual),
            "band": "ZEV",
            "description": "All zero emission vehicles regardless of size or weight",
        },
        "emission_bands": {band: row.model_dump() for band, row in EMISSION_BANDS.items()},
        "statistics": {
            "average_ice_duty": AVERAGE_ICE_DUTY,
            "average_ev_duty": AVERAGE_EV_DUTY,
            "ev_as_percent_of_ice": round(AVERAGE_EV_DUTY / AVERAGE_ICE_DUTY * 100, 1),
            "six_month_admin_charge": SIX_MONTH_ADMIN_CHARGE,
        },
    }
