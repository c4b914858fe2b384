"""eBay OAuth2 endpoints and scopes."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from urllib.parse import urlencode


@dataclass(frozen=True, slots=True)
class Endpoint:
    auth_url: str
    token_url: str


OAUTH20_ENDPOINT = Endpoint(
    auth_url="https://auth.ebay.com/oauth2/authorize",
    token_url="https://api.ebay.com/identity/v1/oauth2/token",
)

OAUTH20_SANDBOX_ENDPOINT = Endpoint(
    auth_url="https://auth.sandbox.ebay.com/oauth2/authorize",
    token_url="https://api.sandbox.ebay.com/identity/v1/oauth2/token",
)

# https://developer.ebay.com/api-docs/static/oauth-scopes.html
SCOPE_ROOT = "https://api.ebay.com/oauth/api_scope"
SCOPE_BUY_OFFER_AUCTION = "https://api.ebay.com/oauth/api_scope/buy.offer.auction"
SCOPE_BUY_ORDER = "https://api.ebay.com/oauth/api_scope/buy.order"
SCOPE_BUY_GUEST_ORDER = "https://api.ebay.com/oauth/api_scope/buy.guest.order"
SCOPE_BUY_ITEM_FEED = "https://api.ebay.com/oauth/api_scope/buy.item.feed"
SCOPE_BUY_MARKETING = "https://api.ebay.com/oauth/api_scope/buy.marketing"


def authorization_url(
    endpoint: Endpoint,
    client_id: str,
    redirect_uri: str,
    scopes: Sequence[str],
    state: str,
) -> str:
    """Build the consent URL of the authorization code grant.

    ``redirect_uri`` is the eBay "RuName" of the application, not an URL.
    """

    query = urlencode(
        {
            "client_id": client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": " ".join(scopes),
            "state": state,
        }
    )
    return f"{endpoint.auth_url}?{query}"
