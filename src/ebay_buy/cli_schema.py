"""Table layouts used by the CLI for list-shaped eBay payloads."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

Row = Mapping[str, Any]
Formatter = Callable[[Any], str]


def lookup(row: Row, path: str) -> Any:
    """Follow a dotted path (``seller.username``) through nested objects."""
    value: Any = row
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


@dataclass(frozen=True)
class Column:
    """One table column: the first non-empty path wins."""

    header: str
    paths: tuple[str, ...]
    formatter: Formatter | None = None
    justify: str = "left"

    def cell(self, row: Row) -> str:
        for path in self.paths:
            value = lookup(row, path)
            if value in (None, "", {}, []):
                continue
            if self.formatter:
                value = self.formatter(value)
                if not value:
                    continue
            return str(value)
        return ""


@dataclass(frozen=True)
class TableView:
    """Title, columns and row ordering of a CLI table.

    ``rows_key`` names the payload field holding the list to render.
    """

    title: str
    rows_key: str
    columns: tuple[Column, ...]
    order_by: str | None = None

    def rows(self, payload: Row) -> list[Row]:
        rows = [row for row in payload.get(self.rows_key) or [] if isinstance(row, Mapping)]
        if self.order_by:
            rows.sort(key=lambda row: str(lookup(row, self.order_by) or ""))
        return rows


def _money(value: Any) -> str:
    if not isinstance(value, Mapping) or not value.get("value"):
        return ""
    return f"{value['value']} {value.get('currency', '')}".strip()


def _joined(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value)


def _clip(width: int) -> Formatter:
    def _fmt(value: Any) -> str:
        text = str(value)
        return text if len(text) <= width else text[: width - 1] + "…"

    return _fmt


# Auctions show the current bid, fixed price listings their price.
_ITEM_COLUMNS = (
    Column("Item ID", ("itemId",)),
    Column("Title", ("title",), formatter=_clip(60)),
    Column("Price", ("currentBidPrice", "price"), formatter=_money, justify="right"),
    Column("Buying Options", ("buyingOptions",), formatter=_joined),
    Column("Condition", ("condition",)),
    Column("Seller", ("seller.username",)),
)

CLI_TABLE_VIEWS: dict[str, TableView] = {
    "browse.search": TableView("Search Results", "itemSummaries", _ITEM_COLUMNS),
    "browse.group": TableView("Item Group", "items", _ITEM_COLUMNS, order_by="itemId"),
}
