"""Domain layer: entities, errors and authorization services."""
