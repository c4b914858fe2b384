"""Command-line interface for the eBay Buy APIs."""
from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The ebay-buy CLI requires Rich for table rendering (pip install rich)."
    ) from exc

from . import EbayClient
from .auth.client_credentials import ClientCredentialsConfig
from .auth.endpoints import OAUTH20_ENDPOINT, OAUTH20_SANDBOX_ENDPOINT, SCOPE_ROOT
from .auth.token import StaticTokenSource, oauth2_session
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .config import BASE_URL, SANDBOX_BASE_URL
from .exceptions import AuthenticationError, EbayError, ErrorData
from .options import (
    Opt,
    opt_browse_contextual_location,
    opt_browse_search,
    opt_browse_search_category_id,
    opt_browse_search_filter,
    opt_browse_search_limit,
    opt_browse_search_offset,
    opt_browse_search_sort,
)
from .resources.offer import MARKETPLACE_USA

app = typer.Typer(help="eBay Buy API CLI.", no_args_is_help=True)

browse_app = typer.Typer(help="Browse API operations.")
offer_app = typer.Typer(help="Offer API (auction) operations.")
app.add_typer(browse_app, name="browse")
app.add_typer(offer_app, name="offer")


def _build_client(
    *,
    sandbox: bool,
    base_url: str | None,
    token: str | None,
    client_id: str | None,
    client_secret: str | None,
    timeout: float,
) -> EbayClient:
    if token:
        session = oauth2_session(StaticTokenSource(token))
    elif client_id and client_secret:
        endpoint = OAUTH20_SANDBOX_ENDPOINT if sandbox else OAUTH20_ENDPOINT
        conf = ClientCredentialsConfig(
            client_id=client_id,
            client_secret=client_secret,
            token_url=endpoint.token_url,
            scopes=[SCOPE_ROOT],
            timeout=timeout,
        )
        session = conf.session_for_api()
    else:
        raise typer.BadParameter(
            "Provide --token, or both --client-id and --client-secret."
        )

    if base_url is None:
        base_url = SANDBOX_BASE_URL if sandbox else BASE_URL
    try:
        return EbayClient(session, base_url=base_url, timeout=timeout)
    except EbayError as exc:
        raise typer.BadParameter(str(exc)) from exc


@contextmanager
def _open_client(**kwargs: Any) -> Iterator[EbayClient]:
    """Yield a client, closing the authorized session it was built on."""
    client = _build_client(**kwargs)
    try:
        yield client
    finally:
        client.session.close()


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, default=str))


console = Console(force_terminal=False, color_system=None)


def _render_table(view: TableView, rows: list[Mapping[str, Any]]) -> None:
    table = Table(title=view.title, box=box.SIMPLE, header_style="bold cyan")
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    for row in rows:
        table.add_row(*(column.cell(row) for column in view.columns))
    console.print(table)


def _present(payload: Mapping[str, Any], *, view_id: str, json_output: bool) -> None:
    """Render ``payload`` as a table, or as JSON when asked or when empty."""
    view = CLI_TABLE_VIEWS[view_id]
    rows = view.rows(payload)
    if json_output or not rows:
        _echo_json(payload)
        return
    _render_table(view, rows)


def _handle_error(exc: EbayError) -> None:
    if isinstance(exc, ErrorData):
        message = f"Request failed (status {exc.status_code}): {exc}"
        for record in exc.errors:
            message += f"\n  [{record.error_id}] {record.message}"
            if record.long_message and record.long_message != record.message:
                message += f" ({record.long_message})"
    elif isinstance(exc, AuthenticationError):
        message = f"Authentication failed: {exc}"
    else:
        message = f"Request failed: {exc}"
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    return {
        "sandbox": typer.Option(
            False,
            "--sandbox/--production",
            envvar="EBAY_SANDBOX",
            help="Target the eBay sandbox instead of production.",
            show_default=True,
        ),
        "base_url": typer.Option(
            None,
            "--base-url",
            envvar="EBAY_BASE_URL",
            help="Custom API root (must end with a slash).",
        ),
        "token": typer.Option(
            None,
            "--token",
            envvar="EBAY_TOKEN",
            help="Already issued OAuth2 access token.",
        ),
        "client_id": typer.Option(
            None,
            "--client-id",
            envvar="EBAY_CLIENT_ID",
            help="Application client id for the client credentials grant.",
        ),
        "client_secret": typer.Option(
            None,
            "--client-secret",
            envvar="EBAY_CLIENT_SECRET",
            help="Application client secret for the client credentials grant.",
            hide_input=True,
        ),
        "timeout": typer.Option(30.0, help="Request timeout (seconds).", show_default=True),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
        "marketplace": typer.Option(
            MARKETPLACE_USA,
            "--marketplace",
            "-m",
            envvar="EBAY_MARKETPLACE_ID",
            help="Marketplace id (e.g. EBAY_US, EBAY_GB).",
            show_default=True,
        ),
    }


_SHARED_OPTIONS = _shared_options()


@browse_app.command("item")
def browse_item(
    item_id: str = typer.Argument(..., help="RESTful item id, e.g. v1|123456789|0."),
    compact: bool = typer.Option(False, "--compact", help="Only fetch the COMPACT fieldgroup."),
    sandbox: bool = _SHARED_OPTIONS["sandbox"],
    base_url: str | None = _SHARED_OPTIONS["base_url"],
    token: str | None = _SHARED_OPTIONS["token"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show the details of an item."""

    with _open_client(
        sandbox=sandbox,
        base_url=base_url,
        token=token,
        client_id=client_id,
        client_secret=client_secret,
        timeout=timeout,
    ) as client:
        try:
            if compact:
                item = client.buy.browse.get_compact_item(item_id)
            else:
                item = client.buy.browse.get_item(item_id)
        except EbayError as exc:
            _handle_error(exc)
            return

    _echo_json(item.to_dict())


@browse_app.command("legacy")
def browse_legacy(
    legacy_item_id: str = typer.Argument(..., help="Legacy (Trading API) item id."),
    sandbox: bool = _SHARED_OPTIONS["sandbox"],
    base_url: str | None = _SHARED_OPTIONS["base_url"],
    token: str | None = _SHARED_OPTIONS["token"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Resolve a legacy item id to its RESTful item."""

    with _open_client(
        sandbox=sandbox,
        base_url=base_url,
        token=token,
        client_id=client_id,
        client_secret=client_secret,
        timeout=timeout,
    ) as client:
        try:
            item = client.buy.browse.get_item_by_legacy_id(legacy_item_id)
        except EbayError as exc:
            _handle_error(exc)
            return

    _echo_json(item.to_dict())


@browse_app.command("group")
def browse_group(
    group_id: str = typer.Argument(..., help="Item group id."),
    sandbox: bool = _SHARED_OPTIONS["sandbox"],
    base_url: str | None = _SHARED_OPTIONS["base_url"],
    token: str | None = _SHARED_OPTIONS["token"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the items of an item group."""

    with _open_client(
        sandbox=sandbox,
        base_url=base_url,
        token=token,
        client_id=client_id,
        client_secret=client_secret,
        timeout=timeout,
    ) as client:
        try:
            group = client.buy.browse.get_items_by_group_id(group_id)
        except EbayError as exc:
            _handle_error(exc)
            return

    _present(group.to_dict(), view_id="browse.group", json_output=output_json)


@browse_app.command("search")
def browse_search(
    q: str | None = typer.Option(None, "--q", "-q", help="Keywords to search for."),
    category_ids: str | None = typer.Option(None, "--category", help="Category ids."),
    filter_: str | None = typer.Option(None, "--filter", help="Field filters, e.g. buyingOptions:{AUCTION}."),
    sort: str | None = typer.Option(None, "--sort", help="Sort order, e.g. price or -price."),
    limit: int | None = typer.Option(None, "--limit", min=1, help="Items per page."),
    offset: int | None = typer.Option(None, "--offset", min=0, help="Items to skip."),
    country: str | None = typer.Option(None, "--country", help="Buyer country for shipping estimates."),
    zip_code: str | None = typer.Option(None, "--zip", help="Buyer postal code for shipping estimates."),
    sandbox: bool = _SHARED_OPTIONS["sandbox"],
    base_url: str | None = _SHARED_OPTIONS["base_url"],
    token: str | None = _SHARED_OPTIONS["token"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    timeout: float = _SHARED_OPTIONS["timeout"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """Search items by keyword, category or filter."""

    opts: list[Opt] = []
    if q:
        opts.append(opt_browse_search(q))
    if category_ids:
        opts.append(opt_browse_search_category_id(category_ids))
    if filter_:
        opts.append(opt_browse_search_filter(filter_))
    if sort:
        opts.append(opt_browse_search_sort(sort))
    if limit is not None:
        opts.append(opt_browse_search_limit(limit))
    if offset is not None:
        opts.append(opt_browse_search_offset(offset))
    if country or zip_code:
        if not (country and zip_code):
            raise typer.BadParameter("--country and --zip must be given together.")
        opts.append(opt_browse_contextual_location(country, zip_code))

    with _open_client(
        sandbox=sandbox,
        base_url=base_url,
        token=token,
        client_id=client_id,
        client_secret=client_secret,
        timeout=timeout,
    ) as client:
        try:
            result = client.buy.browse.search(*opts)
        except EbayError as exc:
            _handle_error(exc)
            return

    _present(result.to_dict(), view_id="browse.search", json_output=output_json)


@offer_app.command("bidding")
def offer_bidding(
    item_id: str = typer.Argument(..., help="RESTful item id of the auction."),
    marketplace: str = _SHARED_OPTIONS["marketplace"],
    sandbox: bool = _SHARED_OPTIONS["sandbox"],
    base_url: str | None = _SHARED_OPTIONS["base_url"],
    token: str | None = _SHARED_OPTIONS["token"],
    client_id: str | None = _SHARED_OPTIONS["client_id"],
    client_secret: str | None = _SHARED_OPTIONS["client_secret"],
    timeout: float = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show the buyer's bidding details on an auction (needs a user token)."""

    with _open_client(
        sandbox=sandbox,
        base_url=base_url,
        token=token,
        client_id=client_id,
        client_secret=client_secret,
        timeout=timeout,
    ) as client:
        try:
            bidding = client.buy.offer.get_bidding(item_id, marketplace)
        except EbayError as exc:
            _handle_error(exc)
            return

    _echo_json(bidding.to_dict())
