"""Offer API helpers: auction bidding.

https://developer.ebay.com/api-docs/buy/offer/static/overview.html
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from ..models import Amount, Model
from ..options import Opt, opt_buy_marketplace
from .base import ResourceBase

# Marketplaces supported by the Offer API.
MARKETPLACE_AUSTRALIA = "EBAY_AU"
MARKETPLACE_CANADA = "EBAY_CA"
MARKETPLACE_GERMANY = "EBAY_DE"
MARKETPLACE_SPAIN = "EBAY_ES"
MARKETPLACE_FRANCE = "EBAY_FR"
MARKETPLACE_GREAT_BRITAIN = "EBAY_GB"
MARKETPLACE_HONG_KONG = "EBAY_HK"
MARKETPLACE_ITALY = "EBAY_IT"
MARKETPLACE_USA = "EBAY_US"

# Valid values for the "auctionStatus" bidding field.
AUCTION_STATUS_ENDED = "ENDED"

# https://developer.ebay.com/api-docs/buy/offer/resources/bidding/methods/getBidding#h2-error-codes
ERR_GET_BIDDING_MARKETPLACE_NOT_SUPPORTED = 120017
ERR_GET_BIDDING_NO_BIDDING_ACTIVITY = 120033


class ProxyBidAmount(Model):
    proxy_bid_id: str = ""
    max_amount: Amount = Field(default_factory=Amount)


class Bidding(Model):
    """The buyer's bidding details on an auction."""

    auction_status: str = ""
    auction_end_date: datetime | None = None
    item_id: str = ""
    current_price: Amount = Field(default_factory=Amount)
    bid_count: int = 0
    high_bidder: bool = False
    reserve_price_met: bool = False
    suggested_bid_amounts: list[Amount] = []
    current_proxy_bid: ProxyBidAmount = Field(default_factory=ProxyBidAmount)

    def ended(self) -> bool:
        return self.auction_status == AUCTION_STATUS_ENDED


class UserConsent(Model):
    adult_only_item: bool = True


class ProxyBidPayload(Model):
    """Body of a place_proxy_bid call.

    ``user_consent`` is omitted from the JSON unless the buyer consented to
    bid on an adult-only item.
    """

    max_amount: Amount = Field(default_factory=Amount)
    user_consent: UserConsent | None = None

    @classmethod
    def build(
        cls, max_amount: str, currency: str, user_consent_adult_only_item: bool = False
    ) -> ProxyBidPayload:
        return cls(
            max_amount=Amount(value=max_amount, currency=currency),
            user_consent=UserConsent(adult_only_item=True) if user_consent_adult_only_item else None,
        )


class ProxyBid(Model):
    proxy_bid_id: str = ""


class OfferResource(ResourceBase):
    """Work with the Offer API (auctions)."""

    BASE = "buy/offer/v1_beta"

    def get_bidding(self, item_id: str, marketplace_id: str, *opts: Opt) -> Bidding:
        """Retrieve the buyer's bidding details on an auction."""
        return self._get(
            f"{self.BASE}/bidding/{item_id}",
            Bidding,
            *opts,
            opt_buy_marketplace(marketplace_id),
        )

    def place_proxy_bid(
        self,
        item_id: str,
        marketplace_id: str,
        max_amount: str,
        currency: str,
        *opts: Opt,
        user_consent_adult_only_item: bool = False,
    ) -> ProxyBid:
        """Place a proxy bid for the buyer on an auction.

        Requires a user access token with the ``buy.offer.auction`` scope.
        """
        payload = ProxyBidPayload.build(max_amount, currency, user_consent_adult_only_item)
        return self._post(
            f"{self.BASE}/bidding/{item_id}/place_proxy_bid",
            payload,
            ProxyBid,
            *opts,
            opt_buy_marketplace(marketplace_id),
        )
