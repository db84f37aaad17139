"""Business logic layer for catalog app."""
