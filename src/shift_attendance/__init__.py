"""Shift Attendance package.

Employees clock in and out of a morning and an afternoon shift; admins review
and export the records. Organized by feature modules (users, attendance,
reports, ...) with a thin Flask controller layer over service/repository layers.
"""
