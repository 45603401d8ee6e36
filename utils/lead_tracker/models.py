# utils/lead_tracker/models.py
"""
Data Model for Lead Tracker

The whole persisted state is one AppData document:

    {
        "generators": [{"id": "...", "name": "..."}],
        "weeklyData": {"2024-W42": {"<generator id>": {record}}},
        "goals": {"team": {targets}, "individual": {"<generator id>": {targets}}}
    }

Record and goal dicts keep the JSON key names used on disk so saved files
stay readable by older versions of the tracker.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# =========================================================================
# NUMBER COERCION
# =========================================================================

def to_number(raw_value: Any) -> float:
    """
    Parse user input as a non-negative decimal.

    Empty, non-numeric, NaN/inf and negative values all become 0.
    """
    if raw_value is None or isinstance(raw_value, bool):
        return 0
    try:
        value = float(str(raw_value).strip())
    except (TypeError, ValueError):
        logger.debug(f"Coercing non-numeric input {raw_value!r} to 0")
        return 0
    if not math.isfinite(value) or value < 0:
        return 0
    return compact_number(value)


def compact_number(value: float):
    """Keep integral values as int so saved JSON reads 3, not 3.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_sph(value: float) -> str:
    return f"{value:.2f}"


def new_generator_id() -> str:
    return uuid.uuid4().hex


# =========================================================================
# RECORDS
# =========================================================================

@dataclass
class Generator:
    """A tracked lead generator. `id` never changes once created."""
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Generator':
        return cls(id=str(data['id']), name=str(data.get('name', '')))


@dataclass
class MetricRecord:
    """
    One generator's numbers for one week.

    sales_per_hour is hours / sales as a 2-decimal string. It is derived,
    refreshed by recalculate() after every write.
    """
    hours_worked: float = 0
    leads_booked: float = 0
    appointments_sat: float = 0
    gross_sales: float = 0
    sales_per_hour: str = "0.00"

    FIELD_MAP = {
        'hoursWorked': 'hours_worked',
        'leadsBooked': 'leads_booked',
        'appointmentsSat': 'appointments_sat',
        'grossSales': 'gross_sales',
    }

    def recalculate(self) -> None:
        if self.gross_sales > 0:
            self.sales_per_hour = format_sph(self.hours_worked / self.gross_sales)
        else:
            self.sales_per_hour = "0.00"

    def get_field(self, field_name: str) -> float:
        return getattr(self, self.FIELD_MAP[field_name])

    def set_field(self, field_name: str, value: float) -> None:
        if field_name not in self.FIELD_MAP:
            raise ValueError(f"Unknown metric field: {field_name}")
        setattr(self, self.FIELD_MAP[field_name], value)
        self.recalculate()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hoursWorked': self.hours_worked,
            'leadsBooked': self.leads_booked,
            'appointmentsSat': self.appointments_sat,
            'grossSales': self.gross_sales,
            'salesPerHour': self.sales_per_hour,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MetricRecord':
        record = cls(
            hours_worked=to_number(data.get('hoursWorked')),
            leads_booked=to_number(data.get('leadsBooked')),
            appointments_sat=to_number(data.get('appointmentsSat')),
            gross_sales=to_number(data.get('grossSales')),
        )
        record.recalculate()
        return record


@dataclass
class MetricTotals:
    """Summed metrics over any set of records."""
    hours: float = 0
    leads: float = 0
    appointments: float = 0
    sales: float = 0

    @property
    def sph(self) -> float:
        """Hours per sale from the summed totals, 2 decimals."""
        return round(self.hours / self.sales, 2) if self.sales > 0 else 0.0

    def __add__(self, other: 'MetricTotals') -> 'MetricTotals':
        return MetricTotals(
            hours=self.hours + other.hours,
            leads=self.leads + other.leads,
            appointments=self.appointments + other.appointments,
            sales=self.sales + other.sales,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hours': self.hours,
            'leads': self.leads,
            'appointments': self.appointments,
            'sales': self.sales,
            'sph': self.sph,
        }

    def display(self) -> Dict[str, str]:
        """Formatted values as shown on totals cards."""
        return {
            'hours': f"{self.hours:.1f}",
            'leads': f"{self.leads:g}",
            'appointments': f"{self.appointments:g}",
            'sales': f"{self.sales:,.2f}".rstrip('0').rstrip('.'),
            'sph': format_sph(self.sph),
        }


# =========================================================================
# GOALS
# =========================================================================

@dataclass
class GoalTargets:
    """Targets for one scope. 0 means no target set."""
    sales: float = 0
    leads: float = 0
    appointments: float = 0
    sph: float = 0

    def get(self, metric: str) -> float:
        return getattr(self, metric)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sales': self.sales,
            'leads': self.leads,
            'appointments': self.appointments,
            'sph': self.sph,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GoalTargets':
        data = data or {}
        return cls(
            sales=to_number(data.get('sales')),
            leads=to_number(data.get('leads')),
            appointments=to_number(data.get('appointments')),
            sph=to_number(data.get('sph')),
        )


@dataclass
class GoalSet:
    team: GoalTargets = field(default_factory=GoalTargets)
    individual: Dict[str, GoalTargets] = field(default_factory=dict)

    def for_generator(self, generator_id: str) -> GoalTargets:
        """Individual targets; zero targets when none were configured."""
        return self.individual.get(generator_id, GoalTargets())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'team': self.team.to_dict(),
            'individual': {gid: t.to_dict() for gid, t in self.individual.items()},
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GoalSet':
        data = data or {}
        return cls(
            team=GoalTargets.from_dict(data.get('team')),
            individual={
                str(gid): GoalTargets.from_dict(targets)
                for gid, targets in (data.get('individual') or {}).items()
            },
        )


# =========================================================================
# ROOT DOCUMENT
# =========================================================================

@dataclass
class AppData:
    generators: List[Generator] = field(default_factory=list)
    weekly_data: Dict[str, Dict[str, MetricRecord]] = field(default_factory=dict)
    goals: GoalSet = field(default_factory=GoalSet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'generators': [g.to_dict() for g in self.generators],
            'weeklyData': {
                week_key: {gid: record.to_dict() for gid, record in bucket.items()}
                for week_key, bucket in self.weekly_data.items()
            },
            'goals': self.goals.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AppData':
        """
        Build from a saved document.

        Accepts the legacy 'leadGenerators' key and a missing 'goals' key.
        """
        generators = data.get('generators')
        if generators is None:
            generators = data.get('leadGenerators', [])

        return cls(
            generators=[Generator.from_dict(g) for g in generators],
            weekly_data={
                str(week_key): {
                    str(gid): MetricRecord.from_dict(record or {})
                    for gid, record in (bucket or {}).items()
                }
                for week_key, bucket in (data.get('weeklyData') or {}).items()
            },
            goals=GoalSet.from_dict(data.get('goals')),
        )
