"""
Service layer for business logic.

This package contains the file loading service and the dashboard
session that holds records, filters and sort state between requests.
"""
