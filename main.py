from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from rich import print as rprint

from config import configure_logging, settings
from storefront.client import StorefrontClient, StorefrontClientError
from storefront.views import StorefrontView


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    configure_logging(args.log_level)
    uvicorn.run(
        "storefront.api:app",
        host=args.host,
        port=args.port,
        log_level=(args.log_level or settings.log_level).lower(),
    )
    return 0


def _show_errors(view: StorefrontView) -> None:
    for message in (view.catalog_error, view.cart_error):
        if message:
            rprint(f"[red]{message}[/red]")


def _browse(view: StorefrontView, args: argparse.Namespace) -> int:
    view.load()
    view.set_category(args.category)
    view.set_gender(args.gender)
    rprint(f"[cyan]Categories:[/cyan] {', '.join(view.categories())}")
    rprint(f"[cyan]Filter:[/cyan] category={view.active_category} gender={view.active_gender}")
    rprint(view.render_catalog())
    _show_errors(view)
    return 1 if view.catalog_error else 0


def _product(view: StorefrontView, args: argparse.Namespace) -> int:
    view.load()
    if view.open(args.item_id) is None:
        rprint(f"[red]No piece with id {args.item_id}.[/red]")
        return 1
    if args.size:
        view.select_size(args.size)
    rprint(view.render_product())
    return 0


def _add(view: StorefrontView, args: argparse.Namespace) -> int:
    view.load()
    if view.open(args.item_id) is None:
        rprint(f"[red]No piece with id {args.item_id}.[/red]")
        return 1
    if args.size:
        view.select_size(args.size)
    return _cart_result(view, view.add_open_product(args.quantity))


def _cart_result(view: StorefrontView, ok: bool) -> int:
    rprint(view.render_cart())
    _show_errors(view)
    return 0 if ok else 1


def _publish(client: StorefrontClient, args: argparse.Namespace) -> int:
    product = {
        "id": args.id,
        "naam": args.naam,
        "merk": args.merk,
        "prijs": args.prijs,
        "afbeelding": args.afbeelding,
        "kleur": args.kleur,
        "maten": args.maten or [],
        "tag": args.tag or [],
        "gender": args.gender,
    }
    try:
        result = client.add_product(product)
    except StorefrontClientError as exc:
        rprint(f"[red]Could not add product:[/red] {exc}")
        return 1
    rprint(f"[green]{result['bericht']}[/green] ({result['catalogusLengte']} items)")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Demo storefront: API server and terminal client.")
    parser.add_argument(
        "--api",
        default=None,
        help=f"Base URL of the storefront API (default: {settings.api_base_url})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the storefront API")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)
    serve.add_argument("--log-level", default=None)

    browse = sub.add_parser("browse", help="Show the catalog")
    browse.add_argument("--category", default="all")
    browse.add_argument("--gender", default="all", choices=StorefrontView.genders())

    product = sub.add_parser("product", help="Show one piece")
    product.add_argument("item_id")
    product.add_argument("--size", default=None)

    sub.add_parser("cart", help="Show the basket")

    add = sub.add_parser("add", help="Add a piece to the basket")
    add.add_argument("item_id")
    add.add_argument("--size", default=None)
    add.add_argument("--quantity", type=int, default=1)

    for name, text in (("inc", "Raise quantity by one"), ("dec", "Lower quantity by one"),
                       ("remove", "Remove a line from the basket")):
        cmd = sub.add_parser(name, help=text)
        cmd.add_argument("item_id")

    sub.add_parser("clear", help="Empty the basket")

    publish = sub.add_parser("publish", help="Add a product to the catalog")
    publish.add_argument("--id", required=True)
    publish.add_argument("--naam", required=True)
    publish.add_argument("--merk", required=True)
    publish.add_argument("--prijs", type=float, required=True)
    publish.add_argument("--afbeelding", required=True)
    publish.add_argument("--kleur", default="")
    publish.add_argument("--maten", nargs="*")
    publish.add_argument("--tag", nargs="*")
    publish.add_argument("--gender", default="unisex", choices=["women", "men", "unisex"])

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        return _serve(args)

    client = StorefrontClient(base_url=args.api)
    view = StorefrontView(client)

    if args.command == "browse":
        return _browse(view, args)
    if args.command == "product":
        return _product(view, args)
    if args.command == "add":
        return _add(view, args)
    if args.command == "publish":
        return _publish(client, args)

    if args.command == "cart":
        view.load_cart()
        return _cart_result(view, view.cart_error is None)
    if args.command == "inc":
        return _cart_result(view, view.increment(args.item_id))
    if args.command == "dec":
        return _cart_result(view, view.decrement(args.item_id))
    if args.command == "remove":
        return _cart_result(view, view.remove(args.item_id))
    if args.command == "clear":
        return _cart_result(view, view.clear_cart())

    return 2


if __name__ == "__main__":
    sys.exit(main())
