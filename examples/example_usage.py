"""Example: use the service layer directly (without Flask).

Controllers are a thin layer; the rules live in the services.
"""

from crew_attendance.attendance.service import AttendanceService
from crew_attendance.attendance.store import AttendanceStore
from crew_attendance.core.enums import Role
from crew_attendance.reports.service import ReportService
from crew_attendance.storage.local_file_backend import LocalFileBackend


def main():
    store = AttendanceStore(LocalFileBackend("example_attendance.json"))
    store.initialize()

    attendance = AttendanceService(store)
    reports = ReportService(store)

    attendance.add_member(2025, 3, "김민수", Role.PACER_GANGNAM.value)
    for d in ("2025-03-03", "2025-03-05", "2025-03-06", "2025-03-12"):
        attendance.set_attendance(2025, 3, "김민수", d, 1)

    print(reports.monthly_stats(2025, 3, "김민수").to_dict())


if __name__ == "__main__":
    main()
