# utils/lead_tracker/fragments.py
"""
Streamlit Fragments for Lead Tracker

UI sections shared by the three pages:
- Sidebar year picker and week navigation
- Generator add / rename / remove (with confirmation dialog)
- Current-week data entry cards
- 52-week timeline grouped by month
- Goal progress, leaderboard with sparklines, goal editor
- Master totals, monthly breakdown and export buttons

Widget callbacks write through MetricsStore, which saves the document;
Streamlit reruns the script afterwards so every view shows fresh totals.
"""

import logging
from typing import Dict

import streamlit as st

from .calendar_utils import week_date_range, weeks_in_month, make_week_key, year_options
from .charts import LeadTrackerCharts
from .constants import (
    FIELD_INPUT_SETTINGS,
    GOAL_METRICS,
    METRIC_FIELDS,
    MONTH_NAMES,
    SPARKLINE_WEEKS,
)
from .export import LeadTrackerExport
from .models import GoalSet, GoalTargets

logger = logging.getLogger(__name__)


# =============================================================================
# SIDEBAR: YEAR & WEEK NAVIGATION
# =============================================================================

def render_year_selector(session, first_year: int, years_ahead: int):
    """Year picker in the sidebar; keeps the current week number."""
    years = year_options(first_year=first_year, years_ahead=years_ahead)
    if session.year not in years:
        years = sorted(set(years + [session.year]))

    selected = st.sidebar.selectbox(
        "📆 Year",
        options=years,
        index=years.index(session.year),
        key=f"year_select_{session.year}"
    )

    if selected != session.year:
        session.set_year(selected)
        st.rerun()


def render_week_navigation(session):
    """Prev / next buttons with the current week label."""
    week_range = week_date_range(session.year, session.week)

    col_prev, col_label, col_next = st.columns([1, 4, 1])

    with col_prev:
        if st.button("◀ Prev", use_container_width=True, key="prev_week"):
            session.move_week(-1)
            st.rerun()

    with col_label:
        st.markdown(
            f"<h4 style='text-align:center;margin:0'>Week {session.week} "
            f"({week_range.label()}) · {session.year}</h4>",
            unsafe_allow_html=True
        )

    with col_next:
        if st.button("Next ▶", use_container_width=True, key="next_week"):
            session.move_week(1)
            st.rerun()


# =============================================================================
# GENERATOR MANAGEMENT
# =============================================================================

def render_add_generator_form(store):
    with st.form("add_generator_form", clear_on_submit=True):
        col_name, col_btn = st.columns([4, 1])
        with col_name:
            name = st.text_input(
                "Lead generator name",
                placeholder="Enter a name",
                label_visibility="collapsed"
            )
        with col_btn:
            submitted = st.form_submit_button("➕ Add", type="primary", use_container_width=True)

        if submitted:
            if not name.strip():
                st.warning("Please enter a name")
            else:
                store.add_generator(name)
                st.rerun()


@st.dialog("Edit Lead Generator")
def edit_generator_dialog(store, generator_id: str):
    generator = store.find_generator(generator_id)
    if generator is None:
        st.error("This lead generator no longer exists")
        return

    name = st.text_input("Name", value=generator.name)

    col_save, col_cancel = st.columns(2)
    with col_save:
        if st.button("💾 Save", type="primary", use_container_width=True):
            if not name.strip():
                st.warning("Please enter a name")
            else:
                store.rename_generator(generator_id, name)
                st.rerun()
    with col_cancel:
        if st.button("Cancel", use_container_width=True):
            st.rerun()


@st.dialog("Remove Lead Generator")
def remove_generator_dialog(store, generator_id: str):
    generator = store.find_generator(generator_id)
    if generator is None:
        st.error("This lead generator no longer exists")
        return

    st.warning(
        f"Are you sure you want to remove **{generator.name}**? "
        "All their data will be deleted."
    )

    col_confirm, col_cancel = st.columns(2)
    with col_confirm:
        if st.button("🗑️ Remove", type="primary", use_container_width=True):
            store.remove_generator(generator_id)
            st.rerun()
    with col_cancel:
        if st.button("Cancel", use_container_width=True):
            st.rerun()


# =============================================================================
# CURRENT WEEK DATA ENTRY
# =============================================================================

def _on_metric_change(store, generator_id: str, week_key: str, field: str, widget_key: str):
    store.set(generator_id, week_key, field, st.session_state.get(widget_key))


def render_generator_card(store, generator, week_key: str):
    """Data entry card for one generator in the selected week."""
    record = store.get(generator.id, week_key)

    with st.container(border=True):
        col_name, col_edit, col_remove = st.columns([6, 1, 1])
        with col_name:
            st.markdown(f"**👤 {generator.name}**")
        with col_edit:
            if st.button("Edit", key=f"edit_{generator.id}", use_container_width=True):
                edit_generator_dialog(store, generator.id)
        with col_remove:
            if st.button("Remove", key=f"remove_{generator.id}", use_container_width=True):
                remove_generator_dialog(store, generator.id)

        columns = st.columns(len(METRIC_FIELDS) + 1)

        for col, (field, label) in zip(columns, METRIC_FIELDS.items()):
            widget_key = f"metric_{week_key}_{generator.id}_{field}"
            settings = FIELD_INPUT_SETTINGS[field]
            with col:
                st.number_input(
                    label,
                    min_value=0.0,
                    value=float(record.get_field(field)),
                    step=settings['step'],
                    format=settings['format'],
                    key=widget_key,
                    on_change=_on_metric_change,
                    args=(store, generator.id, week_key, field, widget_key)
                )

        with columns[-1]:
            st.text_input(
                "Sales Per Hour",
                value=record.sales_per_hour,
                disabled=True,
                key=f"sph_{week_key}_{generator.id}_{record.sales_per_hour}",
                help="Hours worked ÷ gross sales (hours per sale). Lower is better."
            )


def render_current_week(store, session):
    if not store.generators:
        st.info("👋 No lead generators yet. Add one above to start tracking.")
        return

    for generator in store.generators:
        render_generator_card(store, generator, session.week_key)


# =============================================================================
# TIMELINE
# =============================================================================

def render_timeline(store, engine, session):
    """Month-by-month week cards for the selected year."""
    if not store.generators:
        return

    for month_index, month_name in enumerate(MONTH_NAMES):
        weeks = weeks_in_month(session.year, month_index)

        st.markdown(f"**{month_name} {session.year}**")
        if not weeks:
            st.caption("No weeks start in this month")
            continue

        columns = st.columns(6)
        for position, week in enumerate(weeks):
            week_key = make_week_key(session.year, week)
            has_data = bool(store.week_bucket(week_key))
            is_current = week == session.week

            with columns[position % 6]:
                with st.container(border=True):
                    label = f"{'📍 ' if is_current else ''}Week {week}"
                    if st.button(label, key=f"timeline_{month_index}_{week}", use_container_width=True):
                        session.set_week(week)
                        st.rerun()

                    st.caption(week_date_range(session.year, week).label())

                    if has_data:
                        display = engine.week_totals(week_key).display()
                        st.markdown(
                            f"{display['hours']} hrs · {display['sales']} sales  \n"
                            f"**{display['sph']} SPH**"
                        )
                    else:
                        st.caption("No data")


# =============================================================================
# PERFORMANCE: PROGRESS, LEADERBOARD, GOALS
# =============================================================================

def _render_progress_metrics(progress: Dict):
    columns = st.columns(len(progress))
    for col, (metric, item) in zip(columns, progress.items()):
        settings = GOAL_METRICS[metric]
        with col:
            value = settings['format'].format(item.current)
            if item.has_target:
                target = settings['format'].format(item.target)
                delta = f"{item.percent:.0f}% of {target}"
            else:
                delta = "No target set"
            st.metric(
                label=f"{settings['icon']} {settings['display_name']}",
                value=value,
                delta=delta,
                delta_color="normal" if item.is_met else "off"
            )
            st.progress(int(item.percent) / 100)


def render_team_progress(evaluator, session):
    st.subheader("🎯 Team Progress")
    st.caption(f"Week {session.week}, {session.year} vs weekly team goals")
    _render_progress_metrics(evaluator.team_progress(session.week_key))


def render_individual_progress(store, evaluator, session):
    st.subheader("👤 Individual Progress")

    if not store.generators:
        st.info("No lead generators to display.")
        return

    for generator in store.generators:
        with st.expander(generator.name, expanded=False):
            progress = evaluator.individual_progress(generator.id, session.week_key)
            _render_progress_metrics(progress)
            st.altair_chart(
                LeadTrackerCharts.build_progress_chart(progress),
                use_container_width=True
            )


def render_leaderboard(evaluator, session, lookback: int = SPARKLINE_WEEKS):
    st.subheader("🏆 Efficiency Leaderboard")
    st.caption("Ranked by SPH (hours per sale) for the selected week. Lower is better; no sales ranks last.")

    entries = evaluator.rank_by_efficiency(session.week_key)
    if not entries:
        st.info("No lead generators to rank.")
        return

    medals = {1: "🥇", 2: "🥈", 3: "🥉"}

    for entry in entries:
        col_rank, col_name, col_sph, col_spark = st.columns([1, 3, 2, 3])
        with col_rank:
            st.markdown(f"### {medals.get(entry.rank, entry.rank)}")
        with col_name:
            st.markdown(f"**{entry.name}**")
            st.caption(f"{entry.hours:g} hrs · {entry.sales:g} sales")
        with col_sph:
            st.metric("SPH", f"{entry.sph:.2f}" if entry.has_sales else "—")
        with col_spark:
            values = evaluator.sparkline(entry.generator_id, session.year, session.week, lookback)
            st.altair_chart(LeadTrackerCharts.build_sparkline(values), use_container_width=False)


def _goal_inputs(targets: GoalTargets, key_prefix: str) -> GoalTargets:
    columns = st.columns(len(GOAL_METRICS))
    values = {}
    for col, (metric, settings) in zip(columns, GOAL_METRICS.items()):
        with col:
            values[metric] = st.number_input(
                settings['display_name'],
                min_value=0.0,
                value=float(targets.get(metric)),
                step=0.5 if metric == 'sph' else 1.0,
                key=f"{key_prefix}_{metric}"
            )
    return GoalTargets.from_dict(values)


def render_goal_editor(store):
    """Edit team and individual weekly goals; saved as a whole."""
    with st.expander("⚙️ Edit Goals", expanded=False):
        with st.form("goals_form"):
            st.markdown("**Team goals (weekly)**")
            team = _goal_inputs(store.goals.team, "goal_team")

            individual = {}
            for generator in store.generators:
                st.markdown(f"**{generator.name}**")
                individual[generator.id] = _goal_inputs(
                    store.goals.for_generator(generator.id),
                    f"goal_{generator.id}"
                )

            if st.form_submit_button("💾 Save Goals", type="primary"):
                store.save_goals(GoalSet(team=team, individual=individual))
                st.success("✅ Goals saved")
                st.rerun()


# =============================================================================
# MASTER: YEARLY TOTALS & EXPORT
# =============================================================================

def _render_totals_row(totals):
    display = totals.display()
    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("Total Hours Worked", display['hours'])
    col2.metric("Total Leads Booked", display['leads'])
    col3.metric("Total Appointments Sat", display['appointments'])
    col4.metric("Total Gross Sales", display['sales'])
    col5.metric("Avg Hours Per Sale (SPH)", display['sph'])


def render_master_totals(store, engine, session):
    if not store.generators:
        st.info("No lead generators to display.")
        return

    with st.container(border=True):
        st.markdown(f"**📊 Combined Totals - {session.year}**")
        _render_totals_row(engine.yearly_totals(session.year))

    st.markdown("#### 👥 Individual Performance")
    for generator in store.generators:
        with st.container(border=True):
            st.markdown(f"**{generator.name}**")
            _render_totals_row(engine.yearly_totals(session.year, generator.id))


def render_monthly_breakdown(engine, session):
    st.markdown("#### 📅 Monthly Breakdown")
    monthly_df = engine.monthly_breakdown(session.year)

    st.altair_chart(
        LeadTrackerCharts.build_monthly_chart(monthly_df, title=""),
        use_container_width=True
    )

    st.dataframe(
        monthly_df.rename(columns={
            'month': 'Month',
            'hours': 'Hours Worked',
            'leads': 'Leads Booked',
            'appointments': 'Appointments Sat',
            'sales': 'Gross Sales',
            'sph': 'SPH',
        }),
        hide_index=True,
        use_container_width=True,
        column_config={
            'SPH': st.column_config.NumberColumn(format="%.2f"),
            'Hours Worked': st.column_config.NumberColumn(format="%.1f"),
        }
    )


def render_export_buttons(store, engine, session, excel_enabled: bool = True):
    exporter = LeadTrackerExport()
    year = session.year

    col_csv, col_xlsx = st.columns(2)

    with col_csv:
        st.download_button(
            label="📥 Export CSV",
            data=exporter.to_csv(store.data, year),
            file_name=exporter.file_name(year, "csv"),
            mime="text/csv",
            use_container_width=True,
            disabled=not store.generators
        )

    if excel_enabled:
        with col_xlsx:
            try:
                report = exporter.create_report(store.data, year, engine)
            except Exception as e:
                logger.error(f"Excel export failed: {e}")
                st.error(f"Excel export failed: {e}")
                return

            st.download_button(
                label="📊 Export Excel Report",
                data=report,
                file_name=exporter.file_name(year, "xlsx"),
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                use_container_width=True,
                disabled=not store.generators
            )


def render_weekly_table(engine, session):
    """52-week combined totals as a table."""
    timeline_df = engine.weekly_timeline(session.year)
    display_df = timeline_df[timeline_df['has_data']].drop(columns=['week_key', 'has_data'])

    if display_df.empty:
        st.caption("No weekly data recorded for this year yet.")
        return

    st.dataframe(
        display_df.rename(columns={
            'week': 'Week',
            'dates': 'Dates',
            'hours': 'Hours Worked',
            'leads': 'Leads Booked',
            'appointments': 'Appointments Sat',
            'sales': 'Gross Sales',
            'sph': 'SPH',
        }),
        hide_index=True,
        use_container_width=True
    )
