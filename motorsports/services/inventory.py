"""Inventory aggregation over part rows."""
from typing import Iterable


def _value(part) -> float:
    # Missing cost counts as zero
    return (part.cost or 0) * part.quantity


def summarize_inventory(parts: Iterable) -> dict:
    """Totals, low-stock list and per-category breakdown in one pass."""
    total_parts = 0
    total_items = 0
    total_value = 0.0
    low_stock_parts = []
    by_category = {}

    for part in parts:
        total_parts += 1
        total_items += part.quantity
        value = _value(part)
        total_value += value

        if part.is_low_stock:
            low_stock_parts.append({
                "id": part.id,
                "name": part.name,
                "category": part.category,
                "quantity": part.quantity,
                "low_stock_threshold": part.low_stock_threshold,
                "unit": part.unit,
            })

        stats = by_category.setdefault(
            part.category,
            {"category": part.category, "count": 0, "total_items": 0, "total_value": 0.0},
        )
        stats["count"] += 1
        stats["total_items"] += part.quantity
        stats["total_value"] += value

    for stats in by_category.values():
        stats["total_value"] = round(stats["total_value"], 2)

    return {
        "total_parts": total_parts,
        "total_items": total_items,
        "total_value": round(total_value, 2),
        "low_stock_count": len(low_stock_parts),
        "low_stock_parts": low_stock_parts,
        "by_category": list(by_category.values()),
    }
