"""Office Attendance package.

This package is organized by feature modules (attendance, employees, reports,
notifications, ...) with a thin Flask controller layer on top of service and
repository layers. Durable state lives in MySQL; presence, idempotency claims,
cached reports and notification jobs live in Redis.
"""
