"""Transaction list domain: rendering, ordering, selection and aggregation."""
