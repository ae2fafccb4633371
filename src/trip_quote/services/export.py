"""
Tabular export of a calculated quote (CSV / DataFrame).
"""
import pandas as pd

from ..engine.models import CalculatedQuote

COLUMNS = ['Key', 'Item', 'Details', 'Qty', 'Unit Price', 'Subtotal']


def quote_to_frame(calculated: CalculatedQuote) -> pd.DataFrame:
    """Line items, then commissions, then the three totals."""
    rows = [
        {
            'Key': item.key,
            'Item': item.title,
            'Details': item.pricing_notes,
            'Qty': item.qty,
            'Unit Price': item.unit_price,
            'Subtotal': item.subtotal,
        }
        for item in calculated.items
    ]
    rows.append({'Key': 'base_total', 'Item': 'Base total', 'Subtotal': calculated.base_total})
    for commission in calculated.commission_items:
        rows.append({
            'Key': commission.key,
            'Item': commission.title,
            'Details': f"{commission.rate_pct:g}%",
            'Subtotal': commission.amount,
        })
    rows.append({'Key': 'commission_total', 'Item': 'Commission total', 'Subtotal': calculated.commission_total})
    rows.append({'Key': 'total', 'Item': 'Total', 'Subtotal': calculated.total})

    return pd.DataFrame(rows, columns=COLUMNS)


def quote_to_csv(calculated: CalculatedQuote) -> str:
    return quote_to_frame(calculated).to_csv(index=False)
