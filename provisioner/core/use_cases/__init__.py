"""Use cases — end-to-end workflows composed from services."""
