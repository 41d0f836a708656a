"""Headless CMS backend: schema registry, cascading collection deletion, OpenAPI contract."""

__version__ = "1.0.0"
