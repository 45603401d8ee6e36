# utils/lead_tracker/metrics.py
"""
Derived Metric Calculations for Lead Tracker

"Sales Per Hour" (SPH) is computed as hours worked / gross sales, i.e.
hours per sale. Lower is better. Every ranking and goal comparison in the
module relies on that direction.
"""

import logging
from typing import Iterable

from .models import MetricRecord, MetricTotals, format_sph

logger = logging.getLogger(__name__)


class LeadMetrics:
    """
    Stateless calculations over MetricRecord values.

    All methods are static - can be called without instantiation.

    Usage:
        totals = LeadMetrics.sum_records(records)
        sph = LeadMetrics.aggregate_sph(totals)
    """

    @staticmethod
    def sales_per_hour(record: MetricRecord) -> float:
        """Hours per sale of a single record, 2 decimals. 0 without sales."""
        return LeadMetrics.calc_sph(record.hours_worked, record.gross_sales)

    @staticmethod
    def calc_sph(hours: float, sales: float) -> float:
        if sales > 0:
            return round(hours / sales, 2)
        return 0.0

    @staticmethod
    def format_sph(value: float) -> str:
        return format_sph(value)

    @staticmethod
    def sum_records(records: Iterable[MetricRecord]) -> MetricTotals:
        """Elementwise sum of the four raw fields."""
        totals = MetricTotals()
        for record in records:
            totals.hours += record.hours_worked or 0
            totals.leads += record.leads_booked or 0
            totals.appointments += record.appointments_sat or 0
            totals.sales += record.gross_sales or 0
        return totals

    @staticmethod
    def aggregate_sph(totals: MetricTotals) -> float:
        """
        SPH of summed totals.

        Must be recomputed from the summed numerator and denominator; the
        mean of per-record SPH values is a different (wrong) number.
        """
        return LeadMetrics.calc_sph(totals.hours, totals.sales)
