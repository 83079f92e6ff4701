# comanda

comanda is a small terminal register for restaurant orders. You use it to build a menu,
take orders table by table, apply discount coupons and print a report at the end of
the day. The prompts and messages are in Portuguese.

## Installation

```
pip install .
```

The package uses only the standard library.

## Building the menu

```
comanda-create-menu [--arquivo CARDAPIO]
```

The program asks for each item's name, type and price. Names may contain only ASCII
letters and spaces. The types are `0` (Comida), `1` (Bebida) and `2` (Sobremesa). Prices
must not be negative. Each item is added to the end of the menu file. The default file
is `cardapio.bin` in the current directory. After each item the program asks whether to
add another one (`s`/`n`).

## Taking orders

```
comanda [--cardapio CARDAPIO] [--pedidos PEDIDOS]
```

The program loads the menu file (default `cardapio.bin`). It stops with exit status 1
if that file is missing, empty, or not a whole number of records. It also loads the
orders already saved in the orders file (default `pedidos.bin`), so the day can go on
from where it stopped. The program clears the terminal between screens with the
shell command `cls || clear`. For each table you enter:

1. the table number (1–50) and how many people sit there (1–20);
2. one or more items, each with its menu number and a quantity (1–1000). Each order is
   appended to the orders file as soon as you enter it;
3. a coupon code, if you want one. Enter `n` to cancel.

The accepted coupons are `paulo` (20%), `daniel` (30%), `pedro` (40%), `lizandro` (50%)
and `gean` (60%). Coupon codes are not case-sensitive. A valid coupon applies its
discount to every order the table placed in that round, and the orders file is then
rewritten. The program shows the table's total and the amount each person pays.

When you finish with the tables, the program can print the final report of the day.
The report is built from the orders file. It shows:

- the total taken before discounts, the average per table and the number of units sold;
- a summary for each table: its orders, total, coupon and final value, and the amount
  per person;
- the five best-selling items, grouped by exact item name;
- subtotals for each category, and their sum.

## File formats

Both files are sequences of fixed-size little-endian records:

- a menu record is 60 bytes: a NUL-padded name of up to 49 bytes, the item type as a
  32-bit integer, and the price as a 32-bit float;
- an order record is 100 bytes: table, people, item name, type, quantity, subtotal,
  value per person, coupon code and discount (0.0 to 1.0).

## Using it as a library

- `comanda.menu` reads and writes the menu file. It provides `MenuItem`, `ItemKind`,
  `kind_name`, `pack_item`, `unpack_item`, `add_item`, `load_menu`, `count_items`,
  `format_menu` and `print_menu`. Errors are raised as `MenuError`.
- `comanda.orders` creates and stores orders and looks up coupons. It provides `Order`,
  `Coupon`, `default_coupons`, `find_coupon`, `find_menu_item`, `create_order`,
  `apply_coupon_to_table`, `pack_order`, `unpack_order`, `append_order`,
  `load_orders`, `save_orders` and `format_order`. Errors are raised as `OrderError`.
- `comanda.report` computes and formats the figures for the report. It provides
  `Metrics`, `RankingEntry`, `general_metrics`, `subtotals_by_kind`, `ranking`,
  `format_metrics`, `format_subtotals`, `format_ranking`, `format_table_summaries`
  and `final_report`.
- `comanda.prompts` holds the prompts of the menu builder: `is_valid_name`,
  `read_line`, `read_int`, `read_positive_float` and `confirm`. Each prompt takes the
  input and output functions as arguments.
- `comanda.app.run` runs the order-taking session with any input and output functions
  and returns the exit status.

```python
from comanda.orders import load_orders
from comanda.report import final_report

print(final_report(load_orders("pedidos.bin")))
```

## What it does not do

- Menu items cannot be edited or removed. The menu builder only appends items.
- Orders are never cleared. To start a new day, delete or move the orders file.
- There is no set of coupons of your own. The coupon list is fixed in
  `default_coupons`.

## Running the tests

```
pip install ".[test]"
pytest
```