"""Crew Attendance package.

Monthly meeting attendance for a running crew, organized by feature modules
(attendance, reports, backups, storage) with a thin Flask controller layer
over service/store layers.
"""
