"""Domain layer: entities, lookup tables and pure transforms."""
