"""Shared pytest fixtures for cimerge tests."""
