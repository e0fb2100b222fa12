from __future__ import annotations

import argparse
import json

from order_service.core.config import get_settings
from order_service.core.logging import configure_logging
from order_service.domain.pricing import LineItem, compute_pricing
from order_service.persistence.db import configure_engine, init_db


def _line_item(text: str) -> LineItem:
    price, sep, weight = text.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected PRICE:WEIGHT, got {text!r}")
    try:
        item = LineItem(price=int(price), weight=int(weight))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"PRICE and WEIGHT must be integers, got {text!r}") from exc
    if item.price < 0 or item.weight < 0:
        raise argparse.ArgumentTypeError(f"PRICE and WEIGHT must not be negative, got {text!r}")
    return item


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Order Service CLI")
    top = parser.add_subparsers(dest="command", required=True)

    init = top.add_parser("init-db", help="Create database tables")
    init.add_argument("--database-url", default=None, help="Database URL (default: settings.database_url)")

    serve = top.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.add_argument("--reload", action="store_true")

    quote = top.add_parser("quote", help="Price ad-hoc line items without touching the database")
    quote.add_argument("items", nargs="+", type=_line_item, metavar="PRICE:WEIGHT")

    return parser


def _serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "order_service.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def _quote(args: argparse.Namespace) -> int:
    result = compute_pricing(args.items)
    print(
        json.dumps(
            {
                "total_weight": result.total_weight,
                "shipment_amount": result.shipment_amount,
                "subtotal": result.subtotal,
                "total_amount": str(result.total_amount),
                "discounted": result.discounted,
            },
            indent=2,
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "init-db":
        if args.database_url:
            configure_engine(args.database_url)
        init_db()
        return 0
    if args.command == "serve":
        return _serve(args)
    if args.command == "quote":
        return _quote(args)

    parser.error("unsupported command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
