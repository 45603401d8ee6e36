# utils/lead_tracker/constants.py
"""
Constants for Lead Tracker Module

Centralized configuration for:
- Metric field definitions
- Goal metric definitions
- Color schemes
- Chart settings
- Calendar settings
- Export settings
"""

# =====================================================================
# METRIC FIELDS
# =====================================================================

# Raw input fields of a weekly record (JSON key -> display label)
METRIC_FIELDS = {
    "hoursWorked": "Hours Worked",
    "leadsBooked": "Leads Booked",
    "appointmentsSat": "Appointments Sat",
    "grossSales": "Gross Sales",
}

# Derived display field, recomputed on every write
SPH_FIELD = "salesPerHour"

# Input widget settings per field (step, format)
FIELD_INPUT_SETTINGS = {
    "hoursWorked": {"step": 0.5, "format": "%.1f"},
    "leadsBooked": {"step": 1.0, "format": "%.0f"},
    "appointmentsSat": {"step": 1.0, "format": "%.0f"},
    "grossSales": {"step": 1.0, "format": "%.2f"},
}

# =====================================================================
# GOAL METRICS
# =====================================================================

# SPH is hours per sale: lower is better
GOAL_METRICS = {
    "sales": {
        "display_name": "Gross Sales",
        "icon": "💰",
        "lower_is_better": False,
        "format": "{:,.0f}",
    },
    "leads": {
        "display_name": "Leads Booked",
        "icon": "📞",
        "lower_is_better": False,
        "format": "{:,.0f}",
    },
    "appointments": {
        "display_name": "Appointments Sat",
        "icon": "📅",
        "lower_is_better": False,
        "format": "{:,.0f}",
    },
    "sph": {
        "display_name": "SPH (hours per sale)",
        "icon": "⏱️",
        "lower_is_better": True,
        "format": "{:.2f}",
    },
}

# =====================================================================
# COLOR SCHEME
# =====================================================================

COLORS = {
    "hours": "#1f77b4",            # Blue
    "sales": "#FFA500",            # Orange
    "leads": "#2ca02c",            # Green
    "appointments": "#17becf",     # Cyan
    "sph": "#800080",              # Purple

    # Progress
    "progress_good": "#28a745",    # Green (>=100%)
    "progress_mid": "#ffc107",     # Amber
    "progress_bad": "#dc3545",     # Red

    # Timeline
    "current_week": "#d62728",     # Red
    "empty_week": "#e0e0e0",

    # Misc
    "text_dark": "#333333",
    "text_light": "#666666",
    "grid": "#e0e0e0",
}

# =====================================================================
# CALENDAR
# =====================================================================

MONTH_NAMES = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December"
]

MONTH_ORDER = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"
]

# Navigation, timeline and export all assume a fixed 52-week year
WEEKS_PER_YEAR = 52

FIRST_YEAR = 2020
YEARS_AHEAD = 5

SPARKLINE_WEEKS = 4

# =====================================================================
# CHART DIMENSIONS
# =====================================================================

CHART_WIDTH = 800
CHART_HEIGHT = 300

SPARKLINE_WIDTH = 160
SPARKLINE_HEIGHT = 40

# =====================================================================
# EXPORT SETTINGS
# =====================================================================

EXPORT_COLUMNS = [
    "Generator", "Week", "Year", "Hours Worked", "Leads Booked",
    "Appointments Sat", "Gross Sales", "SPH",
]

EXCEL_STYLES = {
    "header_fill_color": "1f77b4",
    "header_font_color": "FFFFFF",
    "currency_format": '#,##0.00',
    "number_format": '#,##0',
    "decimal_format": '0.00',
}
