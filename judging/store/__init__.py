"""
Store Package - Audition Judging Platform
judging/store/__init__.py

Document store backends: Snowflake (durable) and in-memory (dev/tests).
"""

from judging.store.base import DocumentStore
from judging.store.memory import InMemoryDocumentStore
from judging.store.snowflake import SnowflakeDocumentStore

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "SnowflakeDocumentStore",
]
