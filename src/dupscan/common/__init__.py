"""Shared constants, errors and logging helpers."""
