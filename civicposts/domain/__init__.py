"""Domain layer: entities, value objects, ports and pure rules."""
