"""Observability – logging setup for declaration runs."""
