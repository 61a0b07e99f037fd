"""Validation engine."""
