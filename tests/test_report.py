import pytest

from comanda.menu import ItemKind
from comanda.orders import MID_LINE, TOP_BOTTOM, Order
from comanda.report import (
    MAX_RANKED_ITEMS,
    Metrics,
    RankingEntry,
    final_report,
    format_metrics,
    format_ranking,
    format_subtotals,
    format_table_summaries,
    general_metrics,
    ranking,
    subtotals_by_kind,
)


def _order(table, item, kind, quantity, price, people=2, coupon="", discount=0.0):
    subtotal = quantity * price
    return Order(
        table=table,
        people=people,
        item=item,
        kind=kind,
        quantity=quantity,
        subtotal=subtotal,
        per_person=subtotal / people,
        coupon=coupon,
        discount=discount,
    )


@pytest.fixture
def orders():
    return [
        _order(1, "Arroz", ItemKind.FOOD, 2, 10.0),
        _order(1, "Suco", ItemKind.DRINK, 3, 4.0),
        _order(2, "Pudim", ItemKind.DESSERT, 1, 8.0),
        _order(2, "Suco", ItemKind.DRINK, 4, 4.0),
        _order(3, "Arroz", ItemKind.FOOD, 1, 10.0),
    ]


def test_general_metrics_totals(orders):
    metrics = general_metrics(orders)
    assert metrics.total_revenue == pytest.approx(sum(o.subtotal for o in orders))
    assert metrics.tables == len({o.table for o in orders})
    assert metrics.items_sold == sum(o.quantity for o in orders)
    assert metrics.average_per_table == pytest.approx(
        metrics.total_revenue / metrics.tables
    )


def test_general_metrics_empty():
    metrics = general_metrics([])
    assert metrics == Metrics(
        total_revenue=0.0, average_per_table=0.0, items_sold=0, tables=0
    )


def test_subtotals_by_kind_ignores_unknown(orders):
    extra = _order(4, "Misterio", 7, 5, 100.0)
    totals = subtotals_by_kind(orders + [extra])
    assert set(totals) == set(ItemKind)
    assert sum(totals.values()) == pytest.approx(sum(o.subtotal for o in orders))
    assert totals[ItemKind.DESSERT] == pytest.approx(8.0)


def test_ranking_groups_and_sorts(orders):
    entries = ranking(orders, limit=None)
    names = [entry.name for entry in entries]
    assert sorted(names) == sorted({o.item for o in orders})
    quantities = [entry.quantity for entry in entries]
    assert quantities == sorted(quantities, reverse=True)
    suco = next(entry for entry in entries if entry.name == "Suco")
    assert suco.quantity == 3 + 4
    assert suco.subtotal == pytest.approx(12.0 + 16.0)


def test_ranking_is_case_sensitive():
    entries = ranking(
        [_order(1, "Suco", 1, 1, 2.0), _order(1, "suco", 1, 1, 2.0)], limit=None
    )
    assert {entry.name for entry in entries} == {"Suco", "suco"}


def test_ranking_ties_keep_first_seen_order():
    orders = [_order(1, name, 0, 2, 1.0) for name in ("Bife", "Arroz", "Feijao")]
    assert [entry.name for entry in ranking(orders)] == ["Bife", "Arroz", "Feijao"]


def test_ranking_limit():
    orders = [_order(1, f"Item {chr(65 + n)}", 0, n + 1, 1.0) for n in range(8)]
    entries = ranking(orders)
    assert len(entries) == 5
    assert entries[0].name == "Item H"
    assert len(ranking(orders, limit=2)) == 2


def test_ranking_caps_distinct_items():
    names = [f"Prato {chr(65 + n // 26)}{chr(65 + n % 26)}" for n in range(60)]
    orders = [_order(1, name, 0, 1, 1.0) for name in names]
    entries = ranking(orders, limit=None)
    assert len(entries) == MAX_RANKED_ITEMS
    assert [entry.name for entry in entries] == names[:MAX_RANKED_ITEMS]


def test_ranking_capped_item_still_accumulates():
    names = [f"Prato {chr(65 + n // 26)}{chr(65 + n % 26)}" for n in range(55)]
    orders = [_order(1, name, 0, 1, 1.0) for name in names]
    orders.append(_order(1, names[0], 0, 9, 1.0))
    entries = ranking(orders, limit=1)
    assert entries == [RankingEntry(name=names[0], quantity=10, subtotal=10.0)]


def test_format_metrics_layout():
    text = format_metrics(Metrics(35.0, 17.5, 3, 2))
    lines = text.splitlines()
    assert lines[1] == "=== RESUMO GERAL ==="
    assert lines[2] == TOP_BOTTOM
    assert lines[-1] == TOP_BOTTOM
    assert "TOTAL ARRECADADO: R$      35.00" in text
    assert " 3 unidades" in text


def test_format_subtotals_lists_kinds():
    text = format_subtotals(
        {ItemKind.FOOD: 1.0, ItemKind.DRINK: 2.0, ItemKind.DESSERT: 4.0}
    )
    lines = text.splitlines()
    assert lines[1] == "=== SUBTOTAL POR CATEGORIA ==="
    assert [line.split(":")[0] for line in lines[3:7]] == [
        "PRATOS",
        "BEBIDAS",
        "SOBREMESAS",
        "TOTAL",
    ]
    assert lines[-1] == TOP_BOTTOM


def test_format_ranking_numbers_entries():
    entries = [RankingEntry("Suco", 7, 28.0), RankingEntry("Arroz", 3, 30.0)]
    lines = format_ranking(entries).splitlines()
    assert lines[1] == "=== TOP 5 ITENS MAIS VENDIDOS ==="
    assert lines[3].startswith("1o: Suco")
    assert lines[4].startswith("2o: Arroz")
    assert len(lines) == 3 + len(entries) + 1


def test_table_summaries_follow_first_appearance(orders):
    text = format_table_summaries(orders)
    positions = [text.index(f"MESA {table}\n") for table in (1, 2, 3)]
    assert positions == sorted(positions)
    assert text.count("RESUMO FINANCEIRO:") == 3
    assert text.count(MID_LINE) >= len(orders)


def test_table_summary_with_coupon():
    orders = [_order(5, "Bife", 0, 4, 10.0, people=4, coupon="paulo", discount=0.5)]
    text = format_table_summaries(orders)
    assert "CUPOM paulo" in text
    assert "VALOR FINAL:    R$20.00" in text
    assert "POR PESSOA:     R$5.00" in text
    assert "APLICADO" not in text


def test_table_summary_without_coupon():
    text = format_table_summaries([_order(1, "Bife", 0, 1, 10.0)])
    assert "CUPOM" not in text
    assert "VALOR FINAL" not in text
    assert "VALOR TOTAL:" in text


def test_final_report_section_order(orders):
    text = final_report(orders)
    sections = [
        "=== RESUMO GERAL ===",
        "MESA 1",
        "=== TOP 5 ITENS MAIS VENDIDOS ===",
        "=== SUBTOTAL POR CATEGORIA ===",
    ]
    positions = [text.index(section) for section in sections]
    assert positions == sorted(positions)