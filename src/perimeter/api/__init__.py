"""Public API: field helpers, result types and boundary decorators."""
