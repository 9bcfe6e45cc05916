#!/usr/bin/env python3
"""
터미널용 상품 목록 조회 CLI

사용 예:
    python -m app.client list --page 2
    python -m app.client search lap
    python -m app.client stats
"""

import argparse
import sys
from typing import List, Optional

from app.client import state as st
from app.client.api_client import ProductApiClient
from app.client.controller import InventoryController
from app.client.render import TableRow, build_rows, format_statistics
from app.core.config import get_settings


def format_row(row: TableRow) -> str:
    return (
        f"#{row.id:<14} {row.name.striptags():<24} {row.category:<14} "
        f"${row.price:>10} {row.stock:>6} ({row.stock_level.value:<6}) {row.created}"
    )


def print_rows(rows: List[TableRow]) -> None:
    for row in rows:
        print(format_row(row))


def print_pagination(state: st.AppState) -> None:
    controls = st.pagination_controls(state)
    if not controls.visible:
        return
    labels = [
        "..." if link.is_ellipsis else (f"[{link.number}]" if link.active else str(link.number))
        for link in controls.links
    ]
    print("Pages: " + " ".join(labels))


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Inventory Manager client")
    parser.add_argument(
        "--base-url", default=settings.api_base_url, help="API 서버 주소"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="상품 목록 (페이지 단위)")
    list_parser.add_argument("--page", type=int, default=1)

    search_parser = subparsers.add_parser("search", help="상품 검색")
    search_parser.add_argument("term")

    subparsers.add_parser("stats", help="요약 통계")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    controller = InventoryController(
        ProductApiClient(args.base_url, timeout=settings.request_timeout_seconds),
        items_per_page=settings.items_per_page,
    )

    if not controller.load():
        print(f"❌ Could not load products from {args.base_url}", file=sys.stderr)
        return 1

    if args.command == "list":
        controller.change_page(args.page)
        view = controller.render()
        if not controller.state.products:
            print("No products registered")
        print_rows(build_rows(controller.state))
        print_pagination(controller.state)
        print(view.table_info)
    elif args.command == "search":
        view = controller.search(args.term)
        rows = build_rows(controller.state)
        if not rows:
            print(f'No products match "{args.term}"')
        print_rows(rows)
        print(view.table_info)
    elif args.command == "stats":
        for key, value in format_statistics(controller.statistics).items():
            print(f"{key}: {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
