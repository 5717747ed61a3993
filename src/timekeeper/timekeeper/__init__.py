"""Timekeeper package.

Daily attendance tracking for a fixed roster of employees: per-day check-in /
check-out or leave statuses, a local JSON seed store, a shared remote document
kept in sync, and spreadsheet reports built on a template workbook.

The package is organized by feature modules (roster, attendance, sync, reports,
...) with a thin Flask controller layer over service classes.
"""
