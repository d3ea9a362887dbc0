#!/usr/bin/env python3
"""
Command line front end for the cart.

Each invocation loads the saved cart and settings, applies one command and
saves again when the command changed something.

Usage:
    shopcart products --category Books
    shopcart add BK-403 2
    shopcart discount save10
    shopcart show
    shopcart receipt --output receipt.txt
"""
import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from shopcart.cart import CartSession
from shopcart.catalog import ALL_CATEGORIES
from shopcart.config import get_config
from shopcart.errors import ShopCartError
from shopcart.logging import configure_logging, get_logger
from shopcart.receipt import abbreviate
from shopcart.services.money import format_money

logger = get_logger(__name__)

MUTATING_COMMANDS = {"add", "remove", "set", "clear", "discount", "shipping"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shopcart", description="Shopping cart with discounts, VAT and shipping")
    parser.add_argument("--data-dir", type=Path, default=None, help="Directory holding cart.csv and settings.properties")
    sub = parser.add_subparsers(dest="command", required=True)

    products = sub.add_parser("products", help="List catalog products")
    products.add_argument("--search", default="", help="Text matched against id and name")
    products.add_argument("--category", default=ALL_CATEGORIES, help="Category name or 'All'")

    sub.add_parser("categories", help="List product categories")

    add = sub.add_parser("add", help="Add a product to the cart")
    add.add_argument("product_id")
    add.add_argument("quantity", type=int, nargs="?", default=1)

    remove = sub.add_parser("remove", help="Remove a product from the cart")
    remove.add_argument("product_id")

    set_qty = sub.add_parser("set", help="Set a line quantity (0 or less removes it)")
    set_qty.add_argument("product_id")
    set_qty.add_argument("quantity", type=int)

    sub.add_parser("clear", help="Remove all items")

    discount = sub.add_parser("discount", help="Set the discount code ('' to clear)")
    discount.add_argument("code")

    shipping = sub.add_parser("shipping", help="Set the shipping fee")
    shipping.add_argument("fee")

    sub.add_parser("show", help="Show cart and totals")

    receipt = sub.add_parser("receipt", help="Print or export the receipt")
    receipt.add_argument("--output", type=Path, default=None)

    sub.add_parser("checkout", help="Place the order (demo)")
    return parser


def _print_cart(session: CartSession) -> None:
    symbol = session.config.currency_symbol
    if session.cart.is_empty():
        print("Cart is empty.")
    for line in session.cart.lines():
        print(
            f"{line.product_id:<10} {abbreviate(line.name):<28} {line.quantity:>5} "
            f"{format_money(line.unit_price, symbol):>12} {format_money(line.line_total, symbol):>12}"
        )

    totals = session.totals()
    code = session.settings.discount_code
    print()
    print(f"{'Subtotal:':>14} {format_money(totals.subtotal, symbol)}")
    print(f"{'Discount:':>14} -{format_money(totals.discount_total, symbol)}" + (f"  ({code})" if code else ""))
    print(f"{session.engine.tax_label + ':':>14} {format_money(totals.tax, symbol)}")
    print(f"{'Shipping:':>14} {format_money(totals.shipping_after_discount, symbol)}")
    print(f"{'TOTAL:':>14} {format_money(totals.grand_total, symbol)}")


def run(args: argparse.Namespace) -> int:
    config = get_config()
    configure_logging(config.log_level)
    session = CartSession.in_directory(args.data_dir or config.data_dir, config=config)

    if args.command == "products":
        for p in session.catalog.search(args.search, args.category):
            print(f"{p.id:<10} {abbreviate(p.name):<28} {p.category:<12} {format_money(p.unit_price, config.currency_symbol):>12}")
        return 0
    if args.command == "categories":
        for category in session.catalog.list_categories():
            print(category)
        return 0

    result = session.load()
    if result.skipped_count:
        print(f"Warning: {result.skipped_count} saved record(s) could not be restored", file=sys.stderr)

    if args.command == "add":
        line = session.add(args.product_id, args.quantity)
        print(f"Added {args.quantity} x {line.product.name} to cart.")
    elif args.command == "remove":
        if not session.remove(args.product_id):
            print(f"{args.product_id} is not in the cart.")
    elif args.command == "set":
        session.set_quantity(args.product_id, args.quantity)
    elif args.command == "clear":
        session.clear()
        print("Cart cleared.")
    elif args.command == "discount":
        session.apply_discount(args.code)
    elif args.command == "shipping":
        session.set_shipping(args.fee)
    elif args.command == "show":
        _print_cart(session)
    elif args.command == "receipt":
        if args.output:
            path = session.export_receipt(args.output)
            print(f"Receipt saved to {path}")
        else:
            sys.stdout.write(session.render_receipt())
    elif args.command == "checkout":
        totals = session.checkout()
        print(f"Order placed! (demo) Total: {format_money(totals.grand_total, config.currency_symbol)}")

    if args.command in MUTATING_COMMANDS:
        session.save()
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (ShopCartError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
