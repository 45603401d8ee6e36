# utils/lead_tracker/charts.py
"""
Altair Chart Builders for Lead Tracker

Visualization components:
- Weekly timeline (hours & sales bars, SPH line)
- Monthly breakdown chart
- Goal progress bars
- SPH sparkline per generator
"""

import logging
from typing import Dict, List

import altair as alt
import pandas as pd

from .constants import (
    COLORS,
    CHART_WIDTH,
    CHART_HEIGHT,
    GOAL_METRICS,
    MONTH_ORDER,
    SPARKLINE_WIDTH,
    SPARKLINE_HEIGHT,
)

logger = logging.getLogger(__name__)


class LeadTrackerCharts:
    """
    Chart builders for the lead tracker views.

    All methods are static - can be called without instantiation.

    Usage:
        chart = LeadTrackerCharts.build_weekly_timeline_chart(timeline_df, current_week=42)
        st.altair_chart(chart, use_container_width=True)
    """

    # =========================================================================
    # WEEKLY TIMELINE
    # =========================================================================

    @staticmethod
    def build_weekly_timeline_chart(
        timeline_df: pd.DataFrame,
        current_week: int = None,
        title: str = "📅 Weekly Hours, Sales & SPH"
    ) -> alt.Chart:
        """
        Build 52-week chart with bars (hours, sales) and line (SPH).

        Args:
            timeline_df: Output of AggregationEngine.weekly_timeline()
            current_week: Week to highlight
            title: Chart title
        """
        if timeline_df.empty or not timeline_df['has_data'].any():
            return LeadTrackerCharts._empty_chart("No data recorded this year")

        bar_data = timeline_df.melt(
            id_vars=['week', 'dates'],
            value_vars=['hours', 'sales'],
            var_name='Metric',
            value_name='Amount'
        )
        bar_data['Metric'] = bar_data['Metric'].map({'hours': 'Hours', 'sales': 'Sales'})

        color_scale = alt.Scale(
            domain=['Hours', 'Sales'],
            range=[COLORS['hours'], COLORS['sales']]
        )

        bars = alt.Chart(bar_data).mark_bar().encode(
            x=alt.X('week:O', title='Week'),
            y=alt.Y('Amount:Q', title='Hours / Sales'),
            color=alt.Color('Metric:N', scale=color_scale, legend=alt.Legend(orient='bottom')),
            xOffset='Metric:N',
            tooltip=[
                alt.Tooltip('week:O', title='Week'),
                alt.Tooltip('dates:N', title='Dates'),
                alt.Tooltip('Metric:N', title='Metric'),
                alt.Tooltip('Amount:Q', title='Amount', format=',.1f')
            ]
        )

        line = alt.Chart(timeline_df).mark_line(
            point=True,
            color=COLORS['sph'],
            strokeWidth=2
        ).encode(
            x=alt.X('week:O'),
            y=alt.Y('sph:Q', title='SPH (hours per sale)'),
            tooltip=[
                alt.Tooltip('week:O', title='Week'),
                alt.Tooltip('sph:Q', title='SPH', format='.2f')
            ]
        )

        layers = [bars, line]

        if current_week is not None:
            rule = alt.Chart(pd.DataFrame({'week': [current_week]})).mark_rule(
                color=COLORS['current_week'],
                strokeDash=[4, 4]
            ).encode(x='week:O')
            layers.append(rule)

        return alt.layer(*layers).resolve_scale(
            y='independent'
        ).properties(
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
            title=title
        )

    # =========================================================================
    # MONTHLY BREAKDOWN
    # =========================================================================

    @staticmethod
    def build_monthly_chart(
        monthly_df: pd.DataFrame,
        title: str = "📊 Monthly Gross Sales"
    ) -> alt.Chart:
        if monthly_df.empty or monthly_df['sales'].sum() == 0:
            return LeadTrackerCharts._empty_chart("No sales recorded this year")

        bars = alt.Chart(monthly_df).mark_bar(color=COLORS['sales']).encode(
            x=alt.X('month:N', sort=MONTH_ORDER, title='Month'),
            y=alt.Y('sales:Q', title='Gross Sales'),
            tooltip=[
                alt.Tooltip('month:N', title='Month'),
                alt.Tooltip('sales:Q', title='Sales', format=',.0f'),
                alt.Tooltip('hours:Q', title='Hours', format=',.1f'),
                alt.Tooltip('sph:Q', title='SPH', format='.2f')
            ]
        )

        text = bars.mark_text(
            align='center', baseline='bottom', dy=-5, fontSize=10
        ).encode(
            text=alt.Text('sales:Q', format=',.0f'),
            color=alt.value(COLORS['text_dark'])
        )

        return alt.layer(bars, text).properties(
            width=CHART_WIDTH,
            height=CHART_HEIGHT,
            title=title
        )

    # =========================================================================
    # GOAL PROGRESS
    # =========================================================================

    @staticmethod
    def build_progress_chart(progress: Dict, title: str = "") -> alt.Chart:
        """
        Horizontal progress bars (0-100%) per goal metric.

        Args:
            progress: Dict of metric -> ProgressItem
        """
        rows = []
        for metric, item in progress.items():
            percent = item.percent
            if percent >= 100:
                color = COLORS['progress_good']
            elif percent >= 50:
                color = COLORS['progress_mid']
            else:
                color = COLORS['progress_bad']
            rows.append({
                'Metric': GOAL_METRICS[metric]['display_name'],
                'Progress': percent,
                'Current': item.current,
                'Target': item.target,
                'color': color,
            })

        if not rows:
            return LeadTrackerCharts._empty_chart("No goals configured")

        df = pd.DataFrame(rows)

        bars = alt.Chart(df).mark_bar().encode(
            y=alt.Y('Metric:N', sort=None, title=None),
            x=alt.X('Progress:Q', scale=alt.Scale(domain=[0, 100]), title='Progress (%)'),
            color=alt.Color('color:N', scale=None, legend=None),
            tooltip=[
                alt.Tooltip('Metric:N'),
                alt.Tooltip('Current:Q', format=',.2f'),
                alt.Tooltip('Target:Q', format=',.2f'),
                alt.Tooltip('Progress:Q', format='.1f')
            ]
        )

        return bars.properties(
            width=CHART_WIDTH,
            height=40 * len(rows),
            title=title
        )

    # =========================================================================
    # SPARKLINE
    # =========================================================================

    @staticmethod
    def build_sparkline(values: List[float]) -> alt.Chart:
        """Tiny SPH line for the last few weeks (oldest first)."""
        df = pd.DataFrame({
            'step': list(range(1, len(values) + 1)),
            'sph': values,
        })

        return alt.Chart(df).mark_line(
            point=True,
            color=COLORS['sph'],
            strokeWidth=2
        ).encode(
            x=alt.X('step:O', axis=None),
            y=alt.Y('sph:Q', axis=None),
            tooltip=[alt.Tooltip('sph:Q', title='SPH', format='.2f')]
        ).properties(
            width=SPARKLINE_WIDTH,
            height=SPARKLINE_HEIGHT
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _empty_chart(message: str = "No data available") -> alt.Chart:
        """Create an empty chart with a message."""
        return alt.Chart(pd.DataFrame({'note': [message]})).mark_text(
            text=message,
            fontSize=16,
            color=COLORS['text_light']
        ).properties(
            width=CHART_WIDTH,
            height=200
        )
