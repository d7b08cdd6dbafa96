"""
Corridor utilisation report.

Turns a Traffic record into per-corridor load/capacity ratios and a
congestion level for each corridor, plus network-wide figures.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from ..models.corridor import Corridor
from ..models.exceptions import InvalidArgumentError
from ..models.traffic import Traffic


class CongestionLevel(Enum):
    """How close a corridor is to its capacity."""
    FREE = "free"
    BUSY = "busy"
    AT_CAPACITY = "at_capacity"
    OVER_CAPACITY = "over_capacity"


@dataclass
class ReportConfig:
    """Utilisation thresholds for the congestion levels."""
    busy_threshold: float = 0.5
    full_threshold: float = 0.9

    def __post_init__(self):
        if not 0.0 < self.busy_threshold <= self.full_threshold <= 1.0:
            raise InvalidArgumentError(
                "thresholds must satisfy 0 < busy_threshold <= full_threshold <= 1"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary."""
        return {
            'busy_threshold': self.busy_threshold,
            'full_threshold': self.full_threshold
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReportConfig':
        """Create from a dictionary, ignoring unknown keys."""
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


@dataclass
class CorridorLoad:
    """Load on one corridor."""
    corridor: Corridor
    load: int
    capacity: int
    utilisation: float
    level: CongestionLevel

    def to_dict(self) -> Dict[str, Any]:
        return {
            'corridor': str(self.corridor),
            'load': self.load,
            'capacity': self.capacity,
            'utilisation': self.utilisation,
            'level': self.level.value
        }


@dataclass
class TrafficReport:
    """Utilisation of every corridor carrying traffic."""
    corridors: List[CorridorLoad] = field(default_factory=list)
    peak_utilisation: float = 0.0
    mean_utilisation: float = 0.0
    overloaded_corridors: int = 0

    @property
    def is_safe(self) -> bool:
        return self.overloaded_corridors == 0

    def by_level(self, level: CongestionLevel) -> List[CorridorLoad]:
        """Corridors at a given congestion level."""
        return [c for c in self.corridors if c.level == level]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary for serialization."""
        return {
            'corridors': [c.to_dict() for c in self.corridors],
            'peak_utilisation': self.peak_utilisation,
            'mean_utilisation': self.mean_utilisation,
            'overloaded_corridors': self.overloaded_corridors,
            'is_safe': self.is_safe
        }

    def format_table(self) -> str:
        """Plain-text table for terminal output."""
        if not self.corridors:
            return "No corridor traffic."
        width = max(len(str(c.corridor)) for c in self.corridors)
        lines = [f"{'Corridor':<{width}}  {'Load':>6}  {'Use':>6}  Level"]
        for c in self.corridors:
            lines.append(
                f"{str(c.corridor):<{width}}  {c.load:>6}  "
                f"{c.utilisation:>6.0%}  {c.level.value}"
            )
        lines.append(
            f"Peak {self.peak_utilisation:.0%}, mean {self.mean_utilisation:.0%}, "
            f"overloaded {self.overloaded_corridors}"
        )
        return "\n".join(lines)


def _classify(utilisation: float, config: ReportConfig) -> CongestionLevel:
    """Congestion level for a load/capacity ratio."""
    if utilisation > 1.0:
        return CongestionLevel.OVER_CAPACITY
    elif utilisation >= config.full_threshold:
        return CongestionLevel.AT_CAPACITY
    elif utilisation >= config.busy_threshold:
        return CongestionLevel.BUSY
    else:
        return CongestionLevel.FREE


def build_traffic_report(traffic: Traffic,
                         config: Optional[ReportConfig] = None) -> TrafficReport:
    """
    Build a utilisation report for every corridor with traffic.

    Args:
        traffic: Traffic record to summarise
        config: Congestion thresholds

    Returns:
        TrafficReport with corridors in natural order
    """
    if traffic is None:
        raise InvalidArgumentError("traffic is None")
    config = config or ReportConfig()

    items = traffic.items()
    if not items:
        return TrafficReport()

    loads = np.array([load for _, load in items], dtype=float)
    capacities = np.array([c.capacity for c, _ in items], dtype=float)
    utilisation = loads / capacities

    report = TrafficReport(
        peak_utilisation=float(utilisation.max()),
        mean_utilisation=float(utilisation.mean()),
        overloaded_corridors=int(np.count_nonzero(loads > capacities)),
    )
    for (corridor, load), ratio in zip(items, utilisation):
        report.corridors.append(CorridorLoad(
            corridor=corridor,
            load=load,
            capacity=corridor.capacity,
            utilisation=float(ratio),
            level=_classify(float(ratio), config),
        ))
    return report
