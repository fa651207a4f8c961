"""Adapters - I/O implementations of ports."""

from .yaml_store import YamlRecordStore

__all__ = [
    "YamlRecordStore",
]
