"""Interactive prompts that keep asking until the answer is valid."""

from __future__ import annotations

import re
from typing import Callable

InputFunc = Callable[[str], str]
OutputFunc = Callable[[str], object]

_RED = "\033[1;31m"
_RESET = "\033[0m"

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


def is_valid_name(text: str) -> bool:
    """True if the text holds only ASCII letters and spaces."""
    return all((c.isascii() and c.isalpha()) or c == " " for c in text)


def read_line(message: str, input_func: InputFunc = input) -> str:
    """Ask for one line of text."""
    return _first_line(input_func(f"{message}: "))


def read_int(
    message: str,
    low: int,
    high: int,
    input_func: InputFunc = input,
    output: OutputFunc = print,
) -> int:
    """Ask until the answer starts with an integer within [low, high]."""
    while True:
        answer = _first_line(input_func(f"{message} ({low} a {high}): "))
        match = _INT_PREFIX.match(answer)
        if match:
            value = int(match.group(1))
            if low <= value <= high:
                return value
        output(f"{_RED}Entrada invalida! Tente novamente.{_RESET}")


def read_positive_float(
    message: str,
    input_func: InputFunc = input,
    output: OutputFunc = print,
) -> float:
    """Ask until the answer starts with a number that is not negative."""
    while True:
        answer = _first_line(input_func(f"{message} (ex: 12.50): "))
        match = _FLOAT_PREFIX.match(answer)
        if match:
            value = float(match.group(1))
            if not value < 0:
                return value
        output(f"{_RED}Digite um valor valido!{_RESET}")


def confirm(
    message: str,
    input_func: InputFunc = input,
    output: OutputFunc = print,
) -> bool:
    """Ask a yes/no question answered with 's' or 'n'."""
    while True:
        answer = input_func(f"{message} (s/n): ")
        first = answer[:1].lower()
        if first == "s":
            return True
        if first == "n":
            return False
        output(f"{_RED}Digite apenas 's' ou 'n'.{_RESET}")