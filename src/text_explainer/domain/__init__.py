"""Domain layer: entities, interfaces and the pure explanation core."""
