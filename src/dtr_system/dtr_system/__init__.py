"""Municipal HRIS / Daily Time Record package.

This package is organized by feature modules (attendance, leaves, employees, ...)
with a thin Flask controller layer and service/repository layers underneath.
"""
