"""
In-memory ledger views over one owner's sales.

Both functions are pure: they take a snapshot already loaded from the
sales collection and never touch the database.
"""

from typing import Dict, Iterable, List, Optional

from salesledger.models.sale import Sale
from salesledger.schemas.client import ClientSummary


def aggregate_client_debts(sales: Iterable[Sale]) -> List[ClientSummary]:
    """
    Group pending sales by client and sum what each client owes.

    - Only pending sales count.
    - Clients are keyed by exact client_name (case-sensitive).
    - last_item is the item of the first pending sale seen for that client,
      so callers pass sales sorted by date descending to get the most
      recent item. Nothing is sorted here.
    - Output keeps first-encountered client order.
    """
    summaries: Dict[str, ClientSummary] = {}

    for sale in sales:
        if not sale.is_pending():
            continue

        summary = summaries.get(sale.client_name)
        if summary is None:
            summaries[sale.client_name] = ClientSummary(
                client_name=sale.client_name,
                total_debt=sale.value,
                last_item=sale.item_sold
            )
        else:
            summary.total_debt += sale.value

    return list(summaries.values())


def total_pending(summaries: Iterable[ClientSummary]) -> float:
    """Total outstanding debt across all clients."""
    return sum((summary.total_debt for summary in summaries), 0.0)


def filter_sales(
    sales: Iterable[Sale],
    client_query: Optional[str] = "",
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> List[Sale]:
    """
    Filter sales by client name and an inclusive date range.

    client_query is a case-insensitive substring of client_name, used
    untrimmed; empty matches everything. Dates are zero-padded ISO strings, so plain string
    comparison orders them. The result is sorted by date descending and the
    sort is stable for equal dates.
    """
    query = (client_query or "").lower()

    matches = [
        sale for sale in sales
        if (not query or query in sale.client_name.lower())
        and (not start_date or sale.date >= start_date)
        and (not end_date or sale.date <= end_date)
    ]

    return sorted(matches, key=lambda sale: sale.date, reverse=True)
