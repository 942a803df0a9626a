"""Shared data files (YAML catalogs) for the IronMatch Arena API."""
