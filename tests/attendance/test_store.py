from __future__ import annotations

import json

import pytest

from crew_attendance.attendance.service import AttendanceService
from crew_attendance.attendance.store import AttendanceStore
from crew_attendance.core.enums import Role
from crew_attendance.core.exceptions import ValidationError
from crew_attendance.storage.local_file_backend import LocalFileBackend


def test_initialize_loads_persisted_document(persistence):
    persistence.data = {"2025-03": {"a": {"role": Role.PACER.value, "attendance": {"2025-03-03": 1}}}}
    store = AttendanceStore(persistence)

    store.initialize()

    assert store.is_initialized
    assert store.snapshot() == {
        "2025-03": {"a": {"role": "페이서", "attendance": {"2025-03-03": 1}, "extraAttendance": {}, "order": 0}}
    }


def test_initialize_failure_degrades_to_empty_store(persistence):
    persistence.fail_load = True
    store = AttendanceStore(persistence)

    store.initialize()

    assert store.is_initialized
    assert store.snapshot() == {}


def test_initialize_keeps_other_months_when_one_record_is_damaged(tmp_path):
    data_file = tmp_path / "attendance_data.json"
    data_file.write_text(
        json.dumps(
            {
                "2025-02": {"a": {"role": Role.PACER.value, "attendance": {"2025-02-03": 1}, "order": 0}},
                "2025-03": {
                    "b": {"role": Role.PHOTO.value, "attendance": {"2025-03-03": None, "2025-03-05": 1}},
                    "c": "not a record",
                },
                "2025-01": ["not", "a", "roster"],
            }
        ),
        encoding="utf-8",
    )
    store = AttendanceStore(LocalFileBackend(data_file))
    store.initialize()

    AttendanceService(store).add_member(2025, 4, "park", Role.PACER.value)

    on_disk = json.loads(data_file.read_text(encoding="utf-8"))
    assert list(on_disk) == ["2025-02", "2025-03", "2025-04"]
    assert on_disk["2025-02"]["a"]["attendance"] == {"2025-02-03": 1}
    assert list(on_disk["2025-03"]) == ["b"]
    assert on_disk["2025-03"]["b"]["attendance"] == {"2025-03-05": 1}


def test_initialize_falls_back_to_position_for_bad_order(persistence):
    persistence.data = {
        "2025-03": {
            "a": {"role": "x", "order": "first"},
            "b": {"role": "y", "order": 1.5},
            "c": {"role": "z", "attendance": {"2025-03-03": 7}, "extraAttendance": {"extra1": "1"}},
        }
    }
    store = AttendanceStore(persistence)

    store.initialize()

    roster = store.snapshot()["2025-03"]
    assert [roster[n]["order"] for n in ("a", "b", "c")] == [0, 1, 2]
    assert roster["c"]["attendance"] == {}
    assert roster["c"]["extraAttendance"] == {"extra1": 1}


def test_gate_is_closed_until_initialized(persistence):
    store = AttendanceStore(persistence)

    assert not store.wait_for_initialization(timeout=0.01)

    store.start_background_initialization().join(timeout=5)
    assert store.wait_for_initialization(timeout=1)


def test_replace_all_rejects_malformed_document_and_keeps_data(store):
    store.replace_all({"2025-03": {"a": {"role": "x"}}})

    with pytest.raises(ValidationError):
        store.replace_all({"2025-03": {"a": {"attendance": {"2025-03-03": "not-a-number"}}}})

    assert list(store.snapshot()["2025-03"]) == ["a"]
