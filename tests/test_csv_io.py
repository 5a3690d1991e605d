from datetime import date

from timeledger.csv_io import CSV_HEADERS, export_time_entries, import_time_entries
from timeledger.ledger import TimeLedger

WORK_DATE = date(2025, 10, 23)


def test_export_then_import_keeps_entries(tmp_path, ledger):
    ledger.insert("T1", worker_id="U1", worker_name="Ulla", work_date=WORK_DATE, start="08:00", end="16:00", deduct_break=True, recorded_by="admin")
    ledger.insert("T1", worker_name="John Doe", work_date=WORK_DATE, start="22:00", end="02:00", recorded_by="admin")
    path = tmp_path / "entries.csv"

    count = export_time_entries(path, ledger)
    imported = import_time_entries(path)

    assert count == 2
    assert path.read_text().splitlines()[0] == ",".join(CSV_HEADERS)
    assert imported == list(ledger)


def test_import_keeps_stored_hours(tmp_path):
    path = tmp_path / "entries.csv"
    path.write_text(
        ",".join(CSV_HEADERS)
        + "\n"
        + "e1,T1,U1,Ulla,2025-10-23,08:00,16:00,True,7.25,admin,2025-10-23T17:00:00+00:00\n"
    )

    (entry,) = import_time_entries(path)
    restored = TimeLedger.from_entries([entry])

    assert entry.hours_spent == 7.25
    assert entry.break_deducted is True
    assert restored.total_hours_for_worker("T1", "U1") == 7.25
