"""Settings and contract-file configuration."""
