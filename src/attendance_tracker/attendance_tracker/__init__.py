"""Attendance Tracker package.

Daily clock-in / clock-out records for employees, organized by feature module
(attendance) with a thin Flask controller layer over service/repository layers.
"""
