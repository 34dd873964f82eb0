"""Domain layer: record types, errors and repository protocols."""
