"""Sale history exports."""
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List

from salesledger.models.sale import Sale, SaleStatus

CSV_HEADER = ["Data", "Cliente", "Item", "Valor", "Status", "Data Pagamento"]
STATUS_LABELS = {
    SaleStatus.PAID.value: "Pago",
    SaleStatus.PENDING.value: "Pendente",
}

CSV_FILENAME = "extrato_vendas.csv"
JSON_FILENAME = "meu_controle_vendas_backup.json"


def _format_value(value: float) -> str:
    # Decimal(float) is exact, so only true binary halves round up
    return str(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _csv_row(sale: Sale) -> List[str]:
    return [
        sale.date,
        sale.client_name,
        sale.item_sold,
        _format_value(sale.value),
        STATUS_LABELS[SaleStatus(sale.status).value],
        sale.paid_at or "-",
    ]


def sales_to_csv(sales: Iterable[Sale]) -> str:
    """
    Render sales as comma-separated text, one row per sale in the given order.

    Fields are joined as-is with no quoting, so a comma inside a client name
    or item shifts the columns of that row.
    """
    rows = [CSV_HEADER] + [_csv_row(sale) for sale in sales]
    return "\n".join(",".join(row) for row in rows)


def sales_to_json(sales: Iterable[Sale]) -> List[Dict[str, Any]]:
    """Serialize sales with their API field names, unchanged."""
    return [sale.model_dump(mode="json", by_alias=True) for sale in sales]
