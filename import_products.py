#!/usr/bin/env python3
"""
Bulk-import products into the Inventory API data file.

The input is a JSON array of product objects using the same fields as
the ``POST /records`` body (``name``, ``price`` and ``quantity``
required; ``description``, ``sku``, ``category``, ``supplier``
optional).  Each entry is validated and appended through the product
service, so identifiers and timestamps are assigned exactly as for
products created over HTTP.  Invalid entries are reported and skipped.

This script works directly on the data file; stop the server first or
expect the last writer to win.

Usage:
    python import_products.py --input products.json --data-file ./data/products.json
    python import_products.py --input products.json --report ./inventory-report.html
"""

import argparse
import asyncio
import json
import sys
from dataclasses import replace
from pathlib import Path

from inventory_api.app.core.config import settings
from inventory_api.app.core.errors import InventoryError, ValidationError
from inventory_api.app.core.store import ProductStore
from inventory_api.app.services.product_service import ProductService
from inventory_api.app.services.report_service import ReportService


async def import_products(service: ProductService, entries: list) -> tuple:
    imported, skipped = 0, 0
    for position, entry in enumerate(entries, start=1):
        try:
            product = await service.create_product(entry)
        except ValidationError as exc:
            print(f"[!] Entry {position} skipped: {exc.message}", file=sys.stderr)
            skipped += 1
            continue
        print(f"[+] Imported product {product.id}: {product.name}")
        imported += 1
    return imported, skipped


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Import products from a JSON file.")
    ap.add_argument("--input", required=True, help="JSON file containing an array of products")
    ap.add_argument("--data-file", default=settings.data_file, help="Products data file to append to")
    ap.add_argument("--report", help="Also write the HTML stock report to this path")
    args = ap.parse_args(argv)

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"[!] Input not found: {input_path}", file=sys.stderr)
        return 1
    try:
        entries = json.loads(input_path.read_text(encoding="utf-8"))
    except ValueError as exc:
        print(f"[!] Input is not valid JSON: {exc}", file=sys.stderr)
        return 1
    if not isinstance(entries, list):
        print("[!] Input must be a JSON array of products.", file=sys.stderr)
        return 1

    service = ProductService(ProductStore(args.data_file), settings)
    try:
        imported, skipped = asyncio.run(import_products(service, entries))
    except InventoryError as exc:
        print(f"[!] Import aborted: {exc.message}", file=sys.stderr)
        return 2
    print(f"[+] {imported} imported, {skipped} skipped")

    if args.report:
        # The report must reflect the file just written, so read it strictly.
        report_service = ProductService(service.store, replace(settings, strict_reads=True))
        try:
            products = asyncio.run(report_service.list_products())
            html_report = ReportService(settings).render_html(products)
            Path(args.report).write_text(html_report, encoding="utf-8")
        except InventoryError as exc:
            print(f"[!] Report not written: {exc.message}", file=sys.stderr)
            return 2
        except OSError as exc:
            print(f"[!] Could not write report to {args.report}: {exc}", file=sys.stderr)
            return 2
        print(f"[+] Report written to {args.report}")
    return 0 if skipped == 0 else 3


if __name__ == "__main__":
    sys.exit(main())
