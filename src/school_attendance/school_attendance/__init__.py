"""School attendance package.

Organized by feature modules (attendance, analytics, realtime, ...) with a thin
Flask controller layer on top of plain service/repository layers.
"""
