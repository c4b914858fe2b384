"""Resource-specific convenience wrappers."""
from .browse import BrowseResource
from .offer import OfferResource

__all__ = ["BrowseResource", "OfferResource"]
