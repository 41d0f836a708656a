"""Application use cases: one entry point per workflow."""

from headless_cms.application.use_cases.collections import CollectionDeletionService

__all__ = ["CollectionDeletionService"]
