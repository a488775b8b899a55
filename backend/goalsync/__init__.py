"""User accounts and learning-goal profile sync service."""
