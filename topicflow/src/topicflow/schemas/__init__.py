"""Schemas for parsed topic records."""

from .topics import TopicCollection, TopicRecord

__all__ = ["TopicCollection", "TopicRecord"]
