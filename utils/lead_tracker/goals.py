# utils/lead_tracker/goals.py
"""
Goal Progress & Leaderboard for Lead Tracker

Compares current-week aggregates against team / individual goal targets,
ranks generators by efficiency (SPH, lower is better) and builds the
short SPH history shown next to each generator.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List

from .calendar_utils import make_week_key, shift_week
from .constants import GOAL_METRICS, SPARKLINE_WEEKS
from .aggregation import AggregationEngine
from .metrics import LeadMetrics
from .models import GoalTargets, MetricTotals
from .store import MetricsStore

logger = logging.getLogger(__name__)


@dataclass
class ProgressItem:
    """Progress of one metric against its target."""
    metric: str
    current: float
    target: float
    percent: float
    lower_is_better: bool = False

    @property
    def has_target(self) -> bool:
        return self.target > 0

    @property
    def is_met(self) -> bool:
        return self.has_target and self.percent >= 100


@dataclass
class LeaderboardEntry:
    rank: int
    generator_id: str
    name: str
    sph: float
    hours: float
    sales: float

    @property
    def has_sales(self) -> bool:
        return self.sph > 0


class GoalEvaluator:
    """
    Goal progress and efficiency ranking.

    Usage:
        evaluator = GoalEvaluator(store, engine)

        team = evaluator.team_progress("2024-W42")
        board = evaluator.rank_by_efficiency("2024-W42")
        history = evaluator.sparkline(gen.id, 2024, 42)
    """

    def __init__(self, store: MetricsStore, engine: AggregationEngine = None):
        self.store = store
        self.engine = engine if engine is not None else AggregationEngine(store)

    # =========================================================================
    # PROGRESS
    # =========================================================================

    @staticmethod
    def progress_percent(current: float, target: float, lower_is_better: bool = False) -> float:
        """
        Progress toward a target, clamped to [0, 100].

        The target check comes first: no target means no progress signal.
        For lower-is-better metrics (SPH) a current value of 0 means no data
        and yields 0.
        """
        if target <= 0:
            return 0.0

        if not lower_is_better:
            return min(current / target * 100, 100.0)

        if current > 0 and current <= target:
            return 100.0
        if current == 0:
            return 0.0
        return max(0.0, 100 - (current - target) / target * 100)

    def _progress_for(self, totals: MetricTotals, targets: GoalTargets) -> Dict[str, ProgressItem]:
        current_values = {
            'sales': totals.sales,
            'leads': totals.leads,
            'appointments': totals.appointments,
            'sph': LeadMetrics.aggregate_sph(totals),
        }

        progress = {}
        for metric, settings in GOAL_METRICS.items():
            lower_is_better = settings['lower_is_better']
            target = targets.get(metric)
            progress[metric] = ProgressItem(
                metric=metric,
                current=current_values[metric],
                target=target,
                percent=round(self.progress_percent(current_values[metric], target, lower_is_better), 1),
                lower_is_better=lower_is_better,
            )
        return progress

    def team_progress(self, week_key: str) -> Dict[str, ProgressItem]:
        """Current-week combined totals against the team targets."""
        totals = self.engine.week_totals(week_key)
        return self._progress_for(totals, self.store.goals.team)

    def individual_progress(self, generator_id: str, week_key: str) -> Dict[str, ProgressItem]:
        """One generator's current-week record against their own targets."""
        totals = LeadMetrics.sum_records([self.store.peek(generator_id, week_key)])
        return self._progress_for(totals, self.store.goals.for_generator(generator_id))

    # =========================================================================
    # LEADERBOARD
    # =========================================================================

    def rank_by_efficiency(self, week_key: str) -> List[LeaderboardEntry]:
        """
        Rank generators by current-week SPH.

        Lowest positive SPH ranks first. Generators without sales (SPH 0)
        rank after every positive SPH. Ties keep insertion order.
        """
        rows = []
        for generator in self.store.generators:
            record = self.store.peek(generator.id, week_key)
            rows.append((generator, record, LeadMetrics.sales_per_hour(record)))

        rows.sort(key=lambda row: (row[2] == 0, row[2]))

        return [
            LeaderboardEntry(
                rank=position,
                generator_id=generator.id,
                name=generator.name,
                sph=sph,
                hours=record.hours_worked,
                sales=record.gross_sales,
            )
            for position, (generator, record, sph) in enumerate(rows, start=1)
        ]

    # =========================================================================
    # SPARKLINE
    # =========================================================================

    def sparkline(
        self,
        generator_id: str,
        year: int,
        week: int,
        lookback: int = SPARKLINE_WEEKS
    ) -> List[float]:
        """
        SPH of the given week and the preceding weeks, oldest first.

        Always `lookback` values long; weeks without data give 0.
        """
        values = []
        for offset in range(lookback - 1, -1, -1):
            y, w = shift_week(year, week, -offset)
            record = self.store.peek(generator_id, make_week_key(y, w))
            values.append(LeadMetrics.sales_per_hour(record))
        return values
