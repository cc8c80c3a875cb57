"""Event check-in package.

Organized by feature modules (registrations, attendance, checkin, reporting,
...) with a thin Flask controller layer over service/repository layers.
"""
