"""Logging configuration and log-safe formatting of user-supplied values."""
