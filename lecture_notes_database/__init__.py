"""Datastore layer for the lecture notes backend."""
