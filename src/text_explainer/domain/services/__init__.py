"""Pure domain services for the explanation core."""
