"""Static reference data displayed alongside the cost projection."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Tuple

import pandas as pd


@dataclass(frozen=True)
class FactoryLocation:
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class StateCostIndex:
    state: str
    cost_index: float


FACTORY_LOCATIONS: Tuple[FactoryLocation, ...] = (
    FactoryLocation("Foxconn Zhengzhou, China", 34.7466, 113.6254),
    FactoryLocation("Mount Pleasant, Wisconsin, USA", 42.7203, -87.8884),
)

STATE_COST_INDEX: Tuple[StateCostIndex, ...] = (
    StateCostIndex("California", 1.35),
    StateCostIndex("Texas", 1.05),
    StateCostIndex("Ohio", 0.95),
)


def factory_frame() -> pd.DataFrame:
    return pd.DataFrame([asdict(location) for location in FACTORY_LOCATIONS])


def state_cost_frame() -> pd.DataFrame:
    return pd.DataFrame([asdict(entry) for entry in STATE_COST_INDEX])
