"""Functional options mutating a request before it is dispatched.

An option is any callable taking the in-progress :class:`requests.Request`
and mutating it in place. Options are applied in the order they are given to
:meth:`ebay_buy.client.EbayClient.new_request`.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote_plus

from requests import Request

from .config import HEADER_END_USER_CTX, HEADER_MARKETPLACE_ID

Opt = Callable[[Request], None]


def opt_header(name: str, value: str) -> Opt:
    """Set a single-value header, replacing any previous value."""

    def _apply(req: Request) -> None:
        req.headers[name] = value

    return _apply


def opt_query(name: str, value: str | int) -> Opt:
    """Set one query parameter; integers are sent in decimal form.

    Only parameters added through options are replaced. A key already written
    into the path by a wrapper (``fieldgroups`` for ``get_item``) is sent
    twice, once with each value.
    """

    def _apply(req: Request) -> None:
        if req.params is None or isinstance(req.params, (list, tuple)):
            req.params = dict(req.params or [])
        req.params[name] = str(value)

    return _apply


def opt_buy_marketplace(marketplace_id: str) -> Opt:
    """Add the header selecting the marketplace of an operation.

    https://developer.ebay.com/api-docs/buy/static/ref-marketplace-supported.html
    """

    return opt_header(HEADER_MARKETPLACE_ID, marketplace_id)


def opt_browse_contextual_location(country: str, zip_code: str) -> Opt:
    """Append a contextualLocation to the end user context header.

    Strongly recommended for Browse API calls. Other values already present in
    the header are kept.

    https://developer.ebay.com/api-docs/buy/static/api-browse.html#Headers
    """

    def _apply(req: Request) -> None:
        current = req.headers.get(HEADER_END_USER_CTX, "")
        if current:
            current += ","
        location = quote_plus(f"country={country},zip={zip_code}")
        req.headers[HEADER_END_USER_CTX] = f"{current}contextualLocation={location}"

    return _apply


# Query parameters accepted by BrowseResource.search.


def opt_browse_search(q: str) -> Opt:
    return opt_query("q", q)


def opt_browse_search_gtin(gtin: str) -> Opt:
    return opt_query("gtin", gtin)


def opt_browse_search_charity_ids(charity_ids: str) -> Opt:
    return opt_query("charity_ids", charity_ids)


def opt_browse_search_fieldgroups(fieldgroups: str) -> Opt:
    return opt_query("fieldgroups", fieldgroups)


def opt_browse_search_compatibility_filter(compatibility_filter: str) -> Opt:
    return opt_query("compatibility_filter", compatibility_filter)


def opt_browse_search_category_id(category_ids: str) -> Opt:
    return opt_query("category_ids", category_ids)


def opt_browse_search_filter(filter_: str) -> Opt:
    return opt_query("filter", filter_)


def opt_browse_search_sort(sort: str) -> Opt:
    return opt_query("sort", sort)


def opt_browse_search_limit(limit: int) -> Opt:
    return opt_query("limit", limit)


def opt_browse_search_offset(offset: int) -> Opt:
    return opt_query("offset", offset)


def opt_browse_search_aspect_filter(aspect_filter: str) -> Opt:
    return opt_query("aspect_filter", aspect_filter)


def opt_browse_search_epid(epid: int) -> Opt:
    return opt_query("epid", epid)
