"""Menu items and the fixed-size binary file that stores them."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Iterable, Iterator

DEFAULT_MENU_FILE = "cardapio.bin"
NAME_SIZE = 50

# name[50], two bytes of alignment padding, int kind, float price
_RECORD = struct.Struct("<50s2xif")
RECORD_SIZE = _RECORD.size

_SEPARATOR = "|------|--------------------------------|-----------|--------------|"


class MenuError(Exception):
    """Raised when the menu file cannot be read or written."""


class ItemKind(IntEnum):
    FOOD = 0
    DRINK = 1
    DESSERT = 2


_KIND_NAMES = {
    ItemKind.FOOD: "Comida",
    ItemKind.DRINK: "Bebida",
    ItemKind.DESSERT: "Sobremesa",
}


def kind_name(kind: int) -> str:
    """Return the display name of an item kind, or "Desconhecido"."""
    try:
        return _KIND_NAMES[ItemKind(kind)]
    except ValueError:
        return "Desconhecido"


@dataclass(frozen=True)
class MenuItem:
    name: str
    kind: int
    price: float


def pack_item(item: MenuItem) -> bytes:
    """Encode an item as one fixed-size record; long names are cut short."""
    name = item.name.encode("utf-8")[: NAME_SIZE - 1]
    try:
        return _RECORD.pack(name, int(item.kind), float(item.price))
    except struct.error as exc:
        raise MenuError(f"Item invalido: {exc}") from exc


def _from_fields(raw: bytes, kind: int, price: float) -> MenuItem:
    name = raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")
    return MenuItem(name, kind, price)


def unpack_item(data: bytes) -> MenuItem:
    """Decode one record produced by pack_item."""
    if len(data) != RECORD_SIZE:
        raise MenuError(
            f"Registro com {len(data)} bytes (esperado {RECORD_SIZE})"
        )
    return _from_fields(*_RECORD.unpack(data))


def _complete_records(data: bytes) -> Iterator[MenuItem]:
    usable = len(data) - len(data) % RECORD_SIZE
    for fields in _RECORD.iter_unpack(data[:usable]):
        yield _from_fields(*fields)


def add_item(item: MenuItem, path: str | Path = DEFAULT_MENU_FILE) -> None:
    """Append an item to the end of the menu file, creating it if needed."""
    record = pack_item(item)
    try:
        with open(path, "ab") as handle:
            handle.write(record)
    except OSError as exc:
        raise MenuError(
            f"Falha ao tentar abrir cardapio para adicionar item: {exc}"
        ) from exc


def load_menu(path: str | Path = DEFAULT_MENU_FILE) -> list[MenuItem]:
    """Read every item of a menu file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MenuError(f"Erro ao abrir arquivo {path}") from exc
    if len(data) % RECORD_SIZE:
        raise MenuError("Erro: Tamanho do arquivo invalido")
    return list(_complete_records(data))


def count_items(path: str | Path = DEFAULT_MENU_FILE) -> int:
    """Number of records in the menu file; 0 if it cannot be opened."""
    try:
        return Path(path).stat().st_size // RECORD_SIZE
    except OSError:
        return 0


def format_menu(items: Iterable[MenuItem]) -> str:
    """Render the menu as a numbered text table."""
    lines = [
        "",
        "-------------------------- C A R D A P I O -------------------------",
        _SEPARATOR,
        f"| {'No.':<4} | {'Item':<30} | {'Tipo':<9} | {'Valor (R$)':<12} |",
        _SEPARATOR,
    ]
    for number, item in enumerate(items, start=1):
        lines.append(
            f"| {number:<4d} | {item.name[:30]:<30} | "
            f"{kind_name(item.kind)[:9]:<9} | R$ {item.price:9.2f} |"
        )
    lines.append(_SEPARATOR)
    return "\n".join(lines) + "\n"


def print_menu(path: str | Path = DEFAULT_MENU_FILE) -> None:
    """Print the menu table for the items stored in a file."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise MenuError("Falha ao tentar abrir cardapio para leitura.") from exc
    print(format_menu(_complete_records(data)), end="")