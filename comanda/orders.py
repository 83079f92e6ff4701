"""Table orders, discount coupons and the binary file that stores orders."""

from __future__ import annotations

import struct
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Sequence

from comanda.menu import MenuItem, kind_name

DEFAULT_ORDERS_FILE = "pedidos.bin"
ITEM_SIZE = 50
COUPON_SIZE = 20

MID_LINE = "-" * 58
TOP_BOTTOM = "=" * 58

_RED = "\033[1;31m"
_RESET = "\033[0m"

# table, people, item[50], 2 padding bytes, kind, quantity, subtotal,
# per-person value, coupon[20], discount
_RECORD = struct.Struct("<ii50s2xiiff20sf")
RECORD_SIZE = _RECORD.size

_FLOAT32 = struct.Struct("<f")


class OrderError(Exception):
    """Raised when an order cannot be created, read or stored."""


def _f32(value: float) -> float:
    """Round a value to the precision the order file keeps."""
    return _FLOAT32.unpack(_FLOAT32.pack(value))[0]


def _clip(text: str, size: int) -> str:
    """Cut text so that it fits a NUL-terminated field of ``size`` bytes."""
    return text.encode("utf-8")[: size - 1].decode("utf-8", errors="ignore")


def _text_field(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")


@dataclass(frozen=True)
class Coupon:
    code: str
    percentage: float


@dataclass(frozen=True)
class Order:
    table: int
    people: int
    item: str
    kind: int
    quantity: int
    subtotal: float
    per_person: float
    coupon: str = ""
    discount: float = 0.0


def default_coupons() -> tuple[Coupon, ...]:
    """The discount coupons the restaurant accepts."""
    return (
        Coupon("paulo", _f32(0.20)),
        Coupon("daniel", _f32(0.30)),
        Coupon("pedro", _f32(0.40)),
        Coupon("lizandro", _f32(0.50)),
        Coupon("gean", _f32(0.60)),
    )


def find_coupon(
    code: str, coupons: Iterable[Coupon] | None = None
) -> Coupon | None:
    """Return the coupon whose code matches, ignoring case, or None."""
    if coupons is None:
        coupons = default_coupons()
    wanted = code.casefold()
    return next((c for c in coupons if c.code.casefold() == wanted), None)


def find_menu_item(position: int, menu: Sequence[MenuItem]) -> MenuItem:
    """Return the item at a 1-based position of the menu."""
    if not 1 <= position <= len(menu):
        raise OrderError(
            f"{_RED}Erro: Posicao {position} invalida no cardapio!{_RESET}"
        )
    return menu[position - 1]


def create_order(
    table: int,
    people: int,
    position: int,
    menu: Sequence[MenuItem] | None,
    quantity: int,
    coupon: str = "",
    discount: float = 0.0,
) -> Order:
    """Build the order of ``quantity`` units of the menu item at ``position``."""
    if not menu or not 1 <= position <= len(menu):
        raise OrderError(
            f"{_RED}Erro: Item invalido ou cardapio nao carregado!{_RESET}"
        )
    item = menu[position - 1]
    subtotal = _f32(quantity * _f32(item.price))
    per_person = _f32(subtotal / (people if people > 0 else 1))
    return Order(
        table=table,
        people=people,
        item=_clip(item.name, ITEM_SIZE),
        kind=item.kind,
        quantity=quantity,
        subtotal=subtotal,
        per_person=per_person,
        coupon=_clip(coupon, COUPON_SIZE),
        discount=_f32(discount),
    )


def apply_coupon_to_table(
    orders: Iterable[Order], table: int, code: str, discount: float
) -> list[Order]:
    """Return the orders with the coupon set on every order of ``table``."""
    code = _clip(code, COUPON_SIZE)
    discount = _f32(discount)
    return [
        replace(order, coupon=code, discount=discount)
        if order.table == table
        else order
        for order in orders
    ]


def pack_order(order: Order) -> bytes:
    """Encode an order as one fixed-size record."""
    try:
        return _RECORD.pack(
            int(order.table),
            int(order.people),
            _clip(order.item, ITEM_SIZE).encode("utf-8"),
            int(order.kind),
            int(order.quantity),
            float(order.subtotal),
            float(order.per_person),
            _clip(order.coupon, COUPON_SIZE).encode("utf-8"),
            float(order.discount),
        )
    except struct.error as exc:
        raise OrderError(f"Pedido invalido: {exc}") from exc


def _from_fields(fields: tuple) -> Order:
    table, people, item, kind, quantity, subtotal, per_person, coupon, discount = (
        fields
    )
    return Order(
        table=table,
        people=people,
        item=_text_field(item),
        kind=kind,
        quantity=quantity,
        subtotal=subtotal,
        per_person=per_person,
        coupon=_text_field(coupon),
        discount=discount,
    )


def unpack_order(data: bytes) -> Order:
    """Decode one record produced by pack_order."""
    if len(data) != RECORD_SIZE:
        raise OrderError(
            f"Registro com {len(data)} bytes (esperado {RECORD_SIZE})"
        )
    return _from_fields(_RECORD.unpack(data))


def append_order(order: Order, path: str | Path = DEFAULT_ORDERS_FILE) -> None:
    """Append an order to the end of the orders file, creating it if needed."""
    record = pack_order(order)
    try:
        with open(path, "ab") as handle:
            handle.write(record)
    except OSError as exc:
        raise OrderError(
            f"{_RED}Erro ao salvar pedido no arquivo!{_RESET}"
        ) from exc


def load_orders(path: str | Path = DEFAULT_ORDERS_FILE) -> list[Order]:
    """Read every complete order stored in the orders file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise OrderError(f"Nenhum pedido registrado em {path}") from exc
    usable = len(data) - len(data) % RECORD_SIZE
    return [_from_fields(fields) for fields in _RECORD.iter_unpack(data[:usable])]


def save_orders(
    orders: Iterable[Order], path: str | Path = DEFAULT_ORDERS_FILE
) -> None:
    """Replace the orders file with the given orders."""
    data = b"".join(pack_order(order) for order in orders)
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise OrderError(
            f"{_RED}Erro ao salvar pedidos no arquivo!{_RESET}"
        ) from exc


def format_order(order: Order, report: bool = False) -> str:
    """Render an order; outside a report the coupon and discount are shown."""
    lines = [
        f"Mesa {order.table} | Pessoas: {order.people}",
        f"Item: {order.item} ({order.quantity}x) [{kind_name(order.kind)}]",
        f"Subtotal: R${order.subtotal:.2f}",
    ]
    if order.coupon and not report:
        lines.append(
            f"CUPOM {order.coupon} APLICADO ({order.discount * 100:.0f}% OFF)"
        )
        lines.append(
            f"VALOR COM DESCONTO: R${order.subtotal * (1 - order.discount):.2f}"
        )
    lines.append(MID_LINE)
    return "\n".join(lines) + "\n"