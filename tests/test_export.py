# tests/test_export.py
import io

import pandas as pd
from openpyxl import load_workbook

from utils.lead_tracker import EXPORT_COLUMNS, LeadTrackerExport, MetricsStore


def test_one_row_per_generator_week(store, team):
    df = LeadTrackerExport.build_export_frame(store.data, 2024)

    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 3 * 52
    assert list(df[df['Generator'] == "Alice"]['Week']) == list(range(1, 53))
    assert set(df['Year']) == {2024}


def test_values_and_zero_defaults(store, team):
    df = LeadTrackerExport.build_export_frame(store.data, 2024)

    alice_42 = df[(df['Generator'] == "Alice") & (df['Week'] == 42)].iloc[0]
    assert alice_42['Hours Worked'] == 10
    assert alice_42['Gross Sales'] == 2
    assert alice_42['SPH'] == "5.00"

    cara_1 = df[(df['Generator'] == "Cara") & (df['Week'] == 1)].iloc[0]
    assert cara_1['Hours Worked'] == 0
    assert cara_1['SPH'] == "0.00"


def test_export_leaves_data_untouched(store, team):
    before = set(store.data.weekly_data)
    LeadTrackerExport().to_csv(store.data, 2024)
    assert set(store.data.weekly_data) == before


def test_csv_header_and_quoting(store):
    gen = store.add_generator('Smith, "Bo"')
    store.set(gen.id, "2024-W1", "hoursWorked", 5)
    store.add_generator("Plain")

    csv_text = LeadTrackerExport().to_csv(store.data, 2024)
    lines = csv_text.splitlines()

    assert lines[0] == "Generator,Week,Year,Hours Worked,Leads Booked,Appointments Sat,Gross Sales,SPH"
    assert lines[1].startswith('"Smith, ""Bo""",1,2024,')
    assert lines[53].startswith("Plain,1,2024,")

    parsed = pd.read_csv(io.StringIO(csv_text))
    assert parsed.iloc[0]['Generator'] == 'Smith, "Bo"'
    assert len(parsed) == 104


def test_no_generators(store):
    csv_text = LeadTrackerExport().to_csv(store.data, 2024)
    assert csv_text.strip().splitlines() == [",".join(EXPORT_COLUMNS)]


def test_excel_report(store, team):
    report = LeadTrackerExport().create_report(store.data, 2024)
    wb = load_workbook(report)

    assert wb.sheetnames == ["Summary", "Monthly", "Weekly"]
    assert wb["Summary"]["A1"].value == "Lead Generator Report 2024"
    assert wb["Monthly"]["A1"].value == "Month"
    assert wb["Monthly"].max_row == 13
    assert wb["Weekly"].max_row == 3 * 52 + 1


def test_file_name():
    assert LeadTrackerExport.file_name(2024, "csv") == "lead_tracker_2024.csv"
