"""Value Objects - Immutable objects defined by their attributes"""

from .email import Email
from .listing_filter import ListingFilter
__all__ = [
    "Email",
    "ListingFilter",
]
