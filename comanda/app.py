"""Interactive order taking for the tables of a restaurant."""

from __future__ import annotations

import argparse
import math
import re
import struct
import subprocess
from pathlib import Path
from typing import Callable, Sequence

from comanda.menu import (
    DEFAULT_MENU_FILE,
    MenuError,
    count_items,
    format_menu,
    load_menu,
)
from comanda.orders import (
    DEFAULT_ORDERS_FILE,
    MID_LINE,
    TOP_BOTTOM,
    Order,
    OrderError,
    append_order,
    apply_coupon_to_table,
    create_order,
    default_coupons,
    find_coupon,
    format_order,
    load_orders,
    save_orders,
)
from comanda.report import final_report

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], object]

_RED = "\033[1;31m"
_GREEN = "\033[1;32m"
_YELLOW = "\033[1;33m"
_RESET = "\033[0m"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT32 = struct.Struct("<f")


def _f32(value: float) -> float:
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def clear_screen() -> None:
    """Clear the terminal."""
    subprocess.run("cls || clear", shell=True, check=False)


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def _read_int(
    message: str, low: int, high: int, input_func: InputFunc, output: OutputFunc
) -> int:
    while True:
        match = _INT_PREFIX.match(_first_line(input_func(f"{message} ")))
        if not match:
            output(f"{_RED}Erro: Digite um número válido!{_RESET}")
            continue
        value = int(match.group(1))
        if not low <= value <= high:
            output(f"{_RED}Erro: Valor deve estar entre {low} e {high}!{_RESET}")
            continue
        return value


def _yes_no(message: str, input_func: InputFunc, output: OutputFunc) -> bool:
    while True:
        first = input_func(f"{message} (s/n): ")[:1].lower()
        if first in ("s", "n"):
            return first == "s"
        output(f"{_RED}Opcao invalida! Digite 's' ou 'n'.{_RESET}")


def _show_menu(path: str | Path, output: OutputFunc) -> bool:
    try:
        items = load_menu(path)
    except MenuError:
        output("Falha ao tentar abrir cardapio para leitura.")
        return False
    output(format_menu(items).rstrip("\n"))
    return True


def _take_orders(
    table: int,
    people: int,
    menu_path: str | Path,
    menu: list,
    menu_size: int,
    orders_path: str | Path,
    input_func: InputFunc,
    output: OutputFunc,
) -> list[Order]:
    taken: list[Order] = []
    while True:
        clear_screen()
        _show_menu(menu_path, output)
        output(MID_LINE)

        position = _read_int(
            "Numero do item no cardapio: ", 1, menu_size, input_func, output
        )
        quantity = _read_int("Quantidade: ", 1, 1000, input_func, output)

        try:
            order = create_order(table, people, position, menu, quantity, "", 0.0)
        except OrderError as exc:
            output(str(exc))
        else:
            taken.append(order)
            try:
                append_order(order, orders_path)
            except OrderError as exc:
                output(str(exc))

        if not _yes_no("Deseja pedir mais alguma coisa? ", input_func, output):
            return taken


def _ask_coupon(input_func: InputFunc, output: OutputFunc, coupons):
    """Return (code, discount) of an accepted coupon, or None if cancelled."""
    while True:
        code = _first_line(
            input_func("Digite o codigo do cupom (ou 'n' para cancelar): ")
        )
        if len(code) == 1 and code.lower() == "n":
            output(f"{_YELLOW}Operacao cancelada.{_RESET}")
            return None
        coupon = find_coupon(code, coupons)
        if coupon is not None:
            output(
                f"{_GREEN}Desconto de {coupon.percentage * 100:.0f}% "
                f"aplicado!{_RESET}"
            )
            return code, coupon.percentage
        output(f"{_RED}Cupom invalido! Tente novamente.{_RESET}")


def _print_final_report(orders_path: str | Path, output: OutputFunc) -> None:
    try:
        orders = load_orders(orders_path)
    except OrderError:
        output("Nenhum pedido registrado ainda.")
        return
    output(final_report(orders).rstrip("\n"))


def run(
    menu_path: str | Path = DEFAULT_MENU_FILE,
    orders_path: str | Path = DEFAULT_ORDERS_FILE,
    input_func: InputFunc = input,
    output: OutputFunc = print,
) -> int:
    """Take orders table by table until the user stops; returns the exit status."""
    try:
        menu = load_menu(menu_path)
    except MenuError as exc:
        output(str(exc))
        output("Erro ao carregar cardapio!")
        return 1

    menu_size = count_items(menu_path)
    if menu_size == 0:
        output("Erro: Cardapio vazio ou não encontrado!")
        return 1

    coupons = default_coupons()

    try:
        orders = load_orders(orders_path)
    except OrderError:
        orders = []
        output(TOP_BOTTOM)
        output("Nenhum pedido anterior carregado. Iniciando novo dia.")
        output(MID_LINE)

    output(TOP_BOTTOM)

    while True:
        clear_screen()
        if not _show_menu(menu_path, output):
            output("Erro ao carregar cardapio para visualizacao!")
            continue
        output(MID_LINE)

        table = _read_int("Numero da mesa (1-50): ", 1, 50, input_func, output)
        people = _read_int(
            "Quantidade de pessoas na mesa (1-20): ", 1, 20, input_func, output
        )

        start = len(orders)
        orders.extend(
            _take_orders(
                table,
                people,
                menu_path,
                menu,
                menu_size,
                orders_path,
                input_func,
                output,
            )
        )

        clear_screen()
        output(TOP_BOTTOM)
        output(f"RESUMO DOS PEDIDOS DA MESA {table}:")
        output(MID_LINE)

        table_total = 0.0
        for order in orders[start:]:
            output(format_order(order, report=False).rstrip("\n"))
            table_total = _f32(table_total + order.subtotal)

        output(f"TOTAL DA MESA (sem desconto): R${table_total:.2f}")
        output(TOP_BOTTOM)

        discount = 0.0
        if _yes_no("Deseja aplicar cupom de desconto?", input_func, output):
            accepted = _ask_coupon(input_func, output, coupons)
            if accepted is not None:
                code, discount = accepted
                orders[start:] = apply_coupon_to_table(
                    orders[start:], table, code, discount
                )
                try:
                    save_orders(orders, orders_path)
                except OrderError:
                    pass

        final_total = _f32(table_total * _f32(1 - discount))
        output(MID_LINE)
        output(f"TOTAL FINAL DA MESA {table}: R${final_total:.2f}")
        output(f"VALOR POR PESSOA: R${_f32(final_total / people):.2f}")
        output(TOP_BOTTOM)

        if not _yes_no("Deseja registrar pedidos de outra mesa?", input_func, output):
            break

    if _yes_no("Deseja gerar o relatorio final do dia?", input_func, output):
        clear_screen()
        _print_final_report(orders_path, output)

    output("\nSistema encerrado. Volte sempre!")
    return 0


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="comanda",
        description="Registra os pedidos das mesas do restaurante.",
    )
    parser.add_argument(
        "--cardapio",
        default=DEFAULT_MENU_FILE,
        help="arquivo binario do cardapio (padrao: %(default)s)",
    )
    parser.add_argument(
        "--pedidos",
        default=DEFAULT_ORDERS_FILE,
        help="arquivo binario dos pedidos (padrao: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the order-taking session; returns the exit status."""
    args = _parse_args(argv)
    try:
        return run(args.cardapio, args.pedidos, input, print)
    except EOFError:
        print()
        return 1


if __name__ == "__main__":
    raise SystemExit(main())