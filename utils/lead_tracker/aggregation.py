# utils/lead_tracker/aggregation.py
"""
Aggregation Engine for Lead Tracker

Composes LeadMetrics over week / month / year scopes:
- Week totals (all generators in a week bucket)
- Yearly totals (combined or per generator)
- Monthly totals (all generators, weeks sampled by weeks_overlapping_month)
- DataFrame summaries for the timeline, master view and exports
"""

import logging
from typing import Optional

import pandas as pd

from .calendar_utils import (
    make_week_key,
    parse_week_key,
    week_date_range,
    weeks_overlapping_month,
)
from .constants import MONTH_ORDER, WEEKS_PER_YEAR
from .metrics import LeadMetrics
from .models import MetricTotals
from .store import MetricsStore

logger = logging.getLogger(__name__)


class AggregationEngine:
    """
    Rollups over the records held by a MetricsStore.

    Usage:
        engine = AggregationEngine(store)

        week = engine.week_totals("2024-W42")
        year = engine.yearly_totals(2024)
        alice = engine.yearly_totals(2024, generator_id=alice.id)
        monthly_df = engine.monthly_breakdown(2024)
    """

    def __init__(self, store: MetricsStore):
        self.store = store

    # =========================================================================
    # TOTALS
    # =========================================================================

    def week_totals(self, week_key: str) -> MetricTotals:
        """Sum over every generator's record in the week bucket."""
        return LeadMetrics.sum_records(list(self.store.week_bucket(week_key).values()))

    def yearly_totals(self, year: int, generator_id: Optional[str] = None) -> MetricTotals:
        """
        Sum over every week bucket of a year.

        Args:
            year: Year component of the week keys to include
            generator_id: Only this generator's records when given
                (weeks without a record are skipped)
        """
        totals = MetricTotals()

        for week_key, bucket in list(self.store.data.weekly_data.items()):
            parsed = parse_week_key(week_key)
            if parsed is None or parsed[0] != int(year):
                continue

            if generator_id:
                record = bucket.get(generator_id)
                if record is not None:
                    totals += LeadMetrics.sum_records([record])
            else:
                totals += LeadMetrics.sum_records(list(bucket.values()))

        return totals

    def monthly_totals(self, month: int, year: int) -> MetricTotals:
        """
        Combined totals of all generators for a month.

        Args:
            month: 1-based month
            year: Calendar year
        """
        totals = MetricTotals()
        for week in weeks_overlapping_month(month, year):
            totals += self.week_totals(make_week_key(year, week))
        return totals

    # =========================================================================
    # DATAFRAME SUMMARIES
    # =========================================================================

    def monthly_breakdown(self, year: int) -> pd.DataFrame:
        """
        Monthly combined totals for a year.

        Returns:
            DataFrame with 12 rows (Jan..Dec)
        """
        rows = []
        for month in range(1, 13):
            totals = self.monthly_totals(month, year)
            rows.append({
                'month': MONTH_ORDER[month - 1],
                'hours': totals.hours,
                'leads': totals.leads,
                'appointments': totals.appointments,
                'sales': totals.sales,
                'sph': LeadMetrics.aggregate_sph(totals),
            })

        return pd.DataFrame(rows)

    def weekly_timeline(self, year: int) -> pd.DataFrame:
        """
        Combined totals for weeks 1..52 of a year.

        Returns:
            DataFrame with columns week, week_key, dates, hours, leads,
            appointments, sales, sph, has_data
        """
        rows = []
        for week in range(1, WEEKS_PER_YEAR + 1):
            week_key = make_week_key(year, week)
            totals = self.week_totals(week_key)
            rows.append({
                'week': week,
                'week_key': week_key,
                'dates': week_date_range(year, week).label(),
                'hours': totals.hours,
                'leads': totals.leads,
                'appointments': totals.appointments,
                'sales': totals.sales,
                'sph': LeadMetrics.aggregate_sph(totals),
                'has_data': bool(self.store.week_bucket(week_key)),
            })

        return pd.DataFrame(rows)

    def generator_summary(self, year: int) -> pd.DataFrame:
        """
        Yearly totals per generator in insertion order.

        Returns:
            DataFrame with one row per generator (empty DataFrame when none)
        """
        rows = []
        for generator in self.store.generators:
            totals = self.yearly_totals(year, generator.id)
            rows.append({
                'generator_id': generator.id,
                'generator': generator.name,
                'hours': totals.hours,
                'leads': totals.leads,
                'appointments': totals.appointments,
                'sales': totals.sales,
                'sph': LeadMetrics.aggregate_sph(totals),
            })

        if not rows:
            return pd.DataFrame(
                columns=['generator_id', 'generator', 'hours', 'leads', 'appointments', 'sales', 'sph']
            )
        return pd.DataFrame(rows)
