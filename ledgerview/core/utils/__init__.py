"""Small reusable helpers."""
