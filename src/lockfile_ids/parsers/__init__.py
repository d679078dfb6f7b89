"""Lockfile readers."""
