"""Transaction domain models."""
