"""Cost projection for iPhone manufacturing under tariff and penalty scenarios."""
from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Tuple, Union

import pandas as pd

logger = logging.getLogger(__name__)

MIN_TARIFF_PCT = 0
MAX_TARIFF_PCT = 145
TARIFF_STEP_PCT = 5
TARIFF_LEVELS: Tuple[int, ...] = tuple(range(MIN_TARIFF_PCT, MAX_TARIFF_PCT + 1, TARIFF_STEP_PCT))

BASE_CHINA_COST = 588.0
BASE_US_COSTS = {
    "base": 1500.0,
    "pro": 1800.0,
    "pro_max": 2000.0,
}


class InvalidInput(ValueError):
    """Raised when a projection request is outside the supported domain."""


class PenaltyFactor(str, Enum):
    INFLATION = "inflation"
    SUPPLY_CHAIN_REBUILD = "supplyChainRebuild"
    POLICY_PENALTY = "policyPenalty"

    @property
    def rate(self) -> float:
        return PENALTY_RATES[self]

    @property
    def label(self) -> str:
        return PENALTY_LABELS[self]


PENALTY_RATES = {
    PenaltyFactor.INFLATION: 0.05,
    PenaltyFactor.SUPPLY_CHAIN_REBUILD: 0.10,
    PenaltyFactor.POLICY_PENALTY: 0.08,
}
PENALTY_LABELS = {
    PenaltyFactor.INFLATION: "Inflation",
    PenaltyFactor.SUPPLY_CHAIN_REBUILD: "Supply-chain rebuild",
    PenaltyFactor.POLICY_PENALTY: "Policy penalty",
}

FactorLike = Union[PenaltyFactor, str]


@dataclass(frozen=True)
class CostRow:
    tariff_pct: int
    china_cost: float
    us_base_cost: float
    us_pro_cost: float
    us_pro_max_cost: float


CostTable = Tuple[CostRow, ...]


def parse_factors(values: Iterable[FactorLike] | None) -> FrozenSet[PenaltyFactor]:
    """Normalise factor identifiers into a set of PenaltyFactor members."""
    factors = set()
    for value in values or ():
        try:
            factors.add(PenaltyFactor(value))
        except ValueError as exc:
            raise InvalidInput(f"Unknown penalty factor: {value!r}") from exc
    return frozenset(factors)


def validate_tariff(selected_tariff_pct: object) -> int:
    """Check that the selected tariff is an integer percentage in range."""
    if isinstance(selected_tariff_pct, bool) or not isinstance(selected_tariff_pct, numbers.Integral):
        raise InvalidInput(f"Tariff must be an integer percentage, got {selected_tariff_pct!r}")
    if not MIN_TARIFF_PCT <= selected_tariff_pct <= MAX_TARIFF_PCT:
        raise InvalidInput(
            f"Tariff {selected_tariff_pct}% is outside [{MIN_TARIFF_PCT}, {MAX_TARIFF_PCT}]"
        )
    return int(selected_tariff_pct)


def china_cost(tariff_pct: int) -> float:
    return BASE_CHINA_COST * (1 + validate_tariff(tariff_pct) / 100)


def us_tariff_multiplier(selected_tariff_pct: int) -> float:
    return 1 + validate_tariff(selected_tariff_pct) / 100


def penalty_multiplier(enabled_factors: Iterable[FactorLike] | None) -> float:
    return 1 + sum(factor.rate for factor in parse_factors(enabled_factors))


def project(
    selected_tariff_pct: int,
    enabled_factors: Iterable[FactorLike] | None = (),
) -> CostTable:
    """Project China and U.S. manufacturing costs across every tariff level.

    China cost follows each row's own tariff level. U.S. costs scale only with
    the selected tariff and the enabled penalty factors, so they are the same
    on every row.
    """
    us_multiplier = us_tariff_multiplier(selected_tariff_pct)
    total_penalty = penalty_multiplier(enabled_factors)
    scale = us_multiplier * total_penalty

    us_base = BASE_US_COSTS["base"] * scale
    us_pro = BASE_US_COSTS["pro"] * scale
    us_pro_max = BASE_US_COSTS["pro_max"] * scale

    table = tuple(
        CostRow(
            tariff_pct=level,
            china_cost=china_cost(level),
            us_base_cost=us_base,
            us_pro_cost=us_pro,
            us_pro_max_cost=us_pro_max,
        )
        for level in TARIFF_LEVELS
    )
    logger.debug(
        "Projected %d rows: tariff=%d%% us_multiplier=%.4f penalty_multiplier=%.4f",
        len(table),
        selected_tariff_pct,
        us_multiplier,
        total_penalty,
    )
    return table


def row_for_tariff(table: CostTable, tariff_pct: int) -> CostRow:
    """Return the row of a cost table at the given tariff level."""
    for row in table:
        if row.tariff_pct == tariff_pct:
            return row
    raise InvalidInput(f"No cost row for tariff level {tariff_pct}%")


def cost_table_frame(table: CostTable) -> pd.DataFrame:
    """Build a DataFrame view of a cost table for charts and tables."""
    return pd.DataFrame(
        [
            {
                "Tariff_pct": row.tariff_pct,
                "ChinaCost_USD": row.china_cost,
                "USBaseCost_USD": row.us_base_cost,
                "USProCost_USD": row.us_pro_cost,
                "USProMaxCost_USD": row.us_pro_max_cost,
            }
            for row in table
        ],
        columns=[
            "Tariff_pct",
            "ChinaCost_USD",
            "USBaseCost_USD",
            "USProCost_USD",
            "USProMaxCost_USD",
        ],
    )
