# utils/lead_tracker/__init__.py
"""
Lead Tracker Module

Weekly performance tracking per lead generator.
All components are self-contained within this module.

Components:
- calendar_utils: Week numbers, week date ranges, month -> weeks
- models: AppData document and its records
- store: In-memory metrics store (single source of truth)
- metrics: SPH and record sums
- aggregation: Week / month / year rollups
- goals: Goal progress, leaderboard, sparklines
- charts: Altair visualizations
- export: CSV and formatted Excel export

Usage:
    from utils.lead_tracker import (
        MetricsStore,
        AggregationEngine,
        GoalEvaluator,
        LeadTrackerCharts,
        LeadTrackerExport,
    )
"""

from .models import (
    AppData,
    Generator,
    GoalSet,
    GoalTargets,
    MetricRecord,
    MetricTotals,
)
from .calendar_utils import (
    WeekRange,
    week_number_of,
    week_date_range,
    weeks_in_month,
    weeks_overlapping_month,
    current_week,
    shift_week,
    year_options,
    make_week_key,
    parse_week_key,
)
from .store import MetricsStore
from .metrics import LeadMetrics
from .aggregation import AggregationEngine
from .goals import GoalEvaluator, ProgressItem, LeaderboardEntry
from .charts import LeadTrackerCharts
from .export import LeadTrackerExport

# Constants
from .constants import (
    COLORS,
    METRIC_FIELDS,
    GOAL_METRICS,
    MONTH_NAMES,
    MONTH_ORDER,
    WEEKS_PER_YEAR,
    SPARKLINE_WEEKS,
    EXPORT_COLUMNS,
)

__all__ = [
    # Data model
    'AppData',
    'Generator',
    'GoalSet',
    'GoalTargets',
    'MetricRecord',
    'MetricTotals',

    # Calendar
    'WeekRange',
    'week_number_of',
    'week_date_range',
    'weeks_in_month',
    'weeks_overlapping_month',
    'current_week',
    'shift_week',
    'year_options',
    'make_week_key',
    'parse_week_key',

    # Classes
    'MetricsStore',
    'LeadMetrics',
    'AggregationEngine',
    'GoalEvaluator',
    'ProgressItem',
    'LeaderboardEntry',
    'LeadTrackerCharts',
    'LeadTrackerExport',

    # Constants
    'COLORS',
    'METRIC_FIELDS',
    'GOAL_METRICS',
    'MONTH_NAMES',
    'MONTH_ORDER',
    'WEEKS_PER_YEAR',
    'SPARKLINE_WEEKS',
    'EXPORT_COLUMNS',
]

__version__ = '1.0.0'
