"""Internship and application state"""

from .interfaces import IInternshipStore, StoreListener
from .store import InternshipStore

__all__ = ["IInternshipStore", "StoreListener", "InternshipStore"]
