"""Domain layer: models, calculators and workflows."""
