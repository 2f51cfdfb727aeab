"""Core utilities shared across domains."""
