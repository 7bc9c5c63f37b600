"""Persistence helpers shared by store adapters and the training store."""
