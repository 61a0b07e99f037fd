"""Contract model: field types, field specs, contracts and the registry."""
