"""HTTP host for the entity tag routes."""
