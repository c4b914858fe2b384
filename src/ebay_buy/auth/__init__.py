"""OAuth2 credentials for the eBay APIs."""
from .client_credentials import ClientCredentialsConfig
from .endpoints import (
    OAUTH20_ENDPOINT,
    OAUTH20_SANDBOX_ENDPOINT,
    SCOPE_BUY_OFFER_AUCTION,
    SCOPE_ROOT,
    Endpoint,
    authorization_url,
)
from .token import (
    BearerTokenSource,
    ReuseTokenSource,
    StaticTokenSource,
    Token,
    TokenAuth,
    TokenSource,
    oauth2_session,
)

__all__ = [
    "BearerTokenSource",
    "ClientCredentialsConfig",
    "Endpoint",
    "OAUTH20_ENDPOINT",
    "OAUTH20_SANDBOX_ENDPOINT",
    "ReuseTokenSource",
    "SCOPE_BUY_OFFER_AUCTION",
    "SCOPE_ROOT",
    "StaticTokenSource",
    "Token",
    "TokenAuth",
    "TokenSource",
    "authorization_url",
    "oauth2_session",
]
