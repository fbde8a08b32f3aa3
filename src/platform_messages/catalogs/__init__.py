"""Composed catalogs."""
