"""Interactive registration of new items in the menu file."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from comanda.menu import DEFAULT_MENU_FILE, MenuError, MenuItem, add_item
from comanda.prompts import (
    InputFunc,
    OutputFunc,
    confirm,
    is_valid_name,
    read_int,
    read_line,
    read_positive_float,
)

_RED = "\033[1;31m"
_GREEN = "\033[1;32m"
_RESET = "\033[0m"


def _read_name(input_func: InputFunc, output: OutputFunc) -> str:
    while True:
        name = read_line("Nome do item", input_func)
        if is_valid_name(name):
            return name
        output(f"{_RED}Nome invalido! Use apenas letras e espaços.{_RESET}")


def _session(path: str | Path, input_func: InputFunc, output: OutputFunc) -> None:
    output("===== Cadastro de Itens no Cardapio =====")
    while True:
        name = _read_name(input_func, output)

        output("Tipos disponiveis:")
        output("0 - Comida\n1 - Bebida\n2 - Sobremesa")
        kind = read_int("Escolha o tipo", 0, 2, input_func, output)

        price = read_positive_float("Preco do item", input_func, output)

        try:
            add_item(MenuItem(name, kind, price), path)
        except MenuError:
            output(f"{_RED}Erro ao salvar o item no cardapio.{_RESET}")
        else:
            output(f"{_GREEN}Item adicionado com sucesso!{_RESET}")

        if not confirm("Deseja adicionar outro item?", input_func, output):
            break
    output(f"\nCadastro finalizado. Cardapio salvo em '{path}'")


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="criar-cardapio",
        description="Cadastra itens no cardapio do restaurante.",
    )
    parser.add_argument(
        "--arquivo",
        default=DEFAULT_MENU_FILE,
        help="arquivo binario do cardapio (padrao: %(default)s)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Register menu items until the user stops; returns the exit status."""
    args = _parse_args(argv)
    try:
        _session(args.arquivo, input, print)
    except EOFError:
        print()
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())