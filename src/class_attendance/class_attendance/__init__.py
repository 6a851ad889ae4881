"""Class Attendance package.

Organized by feature modules (students, subjects, attendance, reports, ...)
with a thin Flask controller layer over service/repository layers.
"""
