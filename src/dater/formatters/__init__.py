"""Locale-aware pattern formatters."""
