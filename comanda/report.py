"""End-of-day report: general metrics, per-table summaries, ranking and totals."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Iterable, Mapping

from comanda.menu import ItemKind
from comanda.orders import MID_LINE, TOP_BOTTOM, Order, format_order

MAX_RANKED_ITEMS = 50
TOP_ITEMS = 5

_FLOAT32 = struct.Struct("<f")

_KIND_LABELS = (
    (ItemKind.FOOD, "PRATOS:     "),
    (ItemKind.DRINK, "BEBIDAS:    "),
    (ItemKind.DESSERT, "SOBREMESAS: "),
)


def _f32(value: float) -> float:
    """Round a value to single precision, as the order file stores it."""
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _sum32(values: Iterable[float]) -> float:
    total = 0.0
    for value in values:
        total = _f32(total + value)
    return total


def _divide(amount: float, parts: int) -> float:
    """Divide like single-precision arithmetic does, including by zero."""
    if parts:
        return _f32(amount / parts)
    if amount == 0 or math.isnan(amount):
        return math.nan
    return math.copysign(math.inf, amount)


def _tables(orders: Iterable[Order]) -> list[int]:
    """Distinct table numbers in the order they first appear."""
    return list(dict.fromkeys(order.table for order in orders))


@dataclass(frozen=True)
class Metrics:
    total_revenue: float
    average_per_table: float
    items_sold: int
    tables: int


@dataclass(frozen=True)
class RankingEntry:
    name: str
    quantity: int
    subtotal: float


def general_metrics(orders: Iterable[Order]) -> Metrics:
    """Revenue before discounts, average per table and units sold."""
    orders = list(orders)
    total = _sum32(order.subtotal for order in orders)
    tables = len(_tables(orders))
    average = _f32(total / tables) if tables else 0.0
    items = sum(order.quantity for order in orders)
    return Metrics(
        total_revenue=total,
        average_per_table=average,
        items_sold=items,
        tables=tables,
    )


def subtotals_by_kind(orders: Iterable[Order]) -> dict[ItemKind, float]:
    """Subtotal per item kind before discounts; unknown kinds are ignored."""
    totals = {kind: 0.0 for kind in ItemKind}
    for order in orders:
        try:
            kind = ItemKind(order.kind)
        except ValueError:
            continue
        totals[kind] = _f32(totals[kind] + order.subtotal)
    return totals


def ranking(
    orders: Iterable[Order], limit: int | None = TOP_ITEMS
) -> list[RankingEntry]:
    """Items grouped by exact name, most units sold first.

    At most MAX_RANKED_ITEMS distinct names are tracked; later new names are
    dropped. Items with equal quantities keep the order they first appeared in.
    """
    grouped: dict[str, RankingEntry] = {}
    for order in orders:
        entry = grouped.get(order.item)
        if entry is not None:
            grouped[order.item] = RankingEntry(
                name=entry.name,
                quantity=entry.quantity + order.quantity,
                subtotal=_f32(entry.subtotal + order.subtotal),
            )
        elif len(grouped) < MAX_RANKED_ITEMS:
            grouped[order.item] = RankingEntry(
                name=order.item,
                quantity=order.quantity,
                subtotal=order.subtotal,
            )
    ordered = sorted(grouped.values(), key=lambda e: e.quantity, reverse=True)
    return ordered if limit is None else ordered[:limit]


def format_metrics(metrics: Metrics) -> str:
    """Render the general summary block."""
    lines = [
        "",
        "=== RESUMO GERAL ===",
        TOP_BOTTOM,
        f"TOTAL ARRECADADO: R$ {metrics.total_revenue:10.2f}",
        f"MEDIA POR MESA:  R$ {metrics.average_per_table:10.2f}",
        f"ITENS VENDIDOS:  {metrics.items_sold:10d} unidades",
        TOP_BOTTOM,
    ]
    return "\n".join(lines) + "\n"


def format_subtotals(subtotals: Mapping[ItemKind, float]) -> str:
    """Render the subtotal of each item kind and their sum."""
    values = [subtotals.get(kind, 0.0) for kind, _ in _KIND_LABELS]
    lines = ["", "=== SUBTOTAL POR CATEGORIA ===", TOP_BOTTOM]
    lines.extend(
        f"{label}R$ {value:8.2f}"
        for (_, label), value in zip(_KIND_LABELS, values)
    )
    lines.append(f"TOTAL:      R$ {_sum32(values):8.2f}")
    lines.append(TOP_BOTTOM)
    return "\n".join(lines) + "\n"


def format_ranking(entries: Iterable[RankingEntry]) -> str:
    """Render the best-selling items, numbered from 1."""
    lines = ["", "=== TOP 5 ITENS MAIS VENDIDOS ===", TOP_BOTTOM]
    lines.extend(
        f"{place}o: {entry.name:<20} | {entry.quantity:3d}x | "
        f"R$ {entry.subtotal:7.2f}"
        for place, entry in enumerate(entries, start=1)
    )
    lines.append(TOP_BOTTOM)
    return "\n".join(lines) + "\n"


def _table_summary(table: int, orders: list[Order]) -> str:
    parts = [f"\nMESA {table}\n{MID_LINE}\n"]
    parts.extend(format_order(order, report=True) for order in orders)

    total = _sum32(order.subtotal for order in orders)
    coupon, discount = "", 0.0
    for order in orders:
        if order.coupon:
            coupon, discount = order.coupon, order.discount
    people = orders[-1].people
    final = _f32(total * _f32(1 - discount))

    lines = ["", "RESUMO FINANCEIRO:", f"VALOR TOTAL:    R${total:.2f}"]
    if coupon:
        lines.append(f"CUPOM {coupon:<8}   -{discount * 100:.0f}%")
        lines.append(f"VALOR FINAL:    R${final:.2f}")
    lines.append(f"POR PESSOA:     R${_divide(final, people):.2f}")
    lines.append(TOP_BOTTOM)
    parts.append("\n".join(lines) + "\n")
    return "".join(parts)


def format_table_summaries(orders: Iterable[Order]) -> str:
    """Render every table's orders followed by its financial summary."""
    orders = list(orders)
    return "".join(
        _table_summary(table, [o for o in orders if o.table == table])
        for table in _tables(orders)
    )


def final_report(orders: Iterable[Order]) -> str:
    """The whole end-of-day report for the given orders."""
    orders = list(orders)
    return "".join(
        (
            format_metrics(general_metrics(orders)),
            format_table_summaries(orders),
            format_ranking(ranking(orders)),
            format_subtotals(subtotals_by_kind(orders)),
        )
    )