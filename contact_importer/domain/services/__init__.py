"""Pure domain services: value checks, mapping heuristics, type inference."""
