"""Atlant timesheet package.

Work-attendance tracking for a small outsourcing company, organized by
feature modules (workers, shifts, attendance, statistics, sync) with a thin
Flask controller layer over service/repository layers.
"""
