# transparency/services/__init__.py
from .listener import collection_hub
from . import snapshots

__all__ = ["collection_hub", "snapshots"]
