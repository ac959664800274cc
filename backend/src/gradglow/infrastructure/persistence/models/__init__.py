"""ORM Models Package"""

from .internship import InternshipListingModel
from .application import ApplicationModel
from .profile import ProfileModel

__all__ = [
    "InternshipListingModel",
    "ApplicationModel",
    "ProfileModel",
]
