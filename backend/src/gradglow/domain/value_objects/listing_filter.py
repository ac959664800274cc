"""
ListingFilter Value Object
Criteria used by the listings page to narrow the internship collection
"""
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities.internship import Internship


@dataclass(frozen=True)
class ListingFilter:
    """Search box, category, location and remote-only toggle"""

    search: str = ""
    category: Optional[str] = None
    location: Optional[str] = None
    remote_only: bool = False

    def is_empty(self) -> bool:
        return not (self.search.strip() or self.category or self.location or self.remote_only)

    def matches(self, internship: "Internship") -> bool:
        """Check a listing against every active criterion"""
        needle = self.search.strip().lower()
        if needle and not any(
            needle in (text or "").lower()
            for text in (internship.title, internship.company, internship.description)
        ):
            return False

        # Categories may be enum members or passed-through strings; both compare by value
        if self.category and internship.category != self.category:
            return False

        if self.location and internship.location != self.location:
            return False

        if self.remote_only and not internship.is_remote:
            return False

        return True
