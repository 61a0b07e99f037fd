"""Constraint rules applied to individual field values."""
