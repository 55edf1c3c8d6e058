"""Adapters – integrations with third-party model layers."""
