#!/usr/bin/env python3
"""Export maker script.

Renders a PDF from a JSON input file and saves it to the export directory.

Usage:
    python -m app.scripts.export_maker proposal offer.json
    python -m app.scripts.export_maker timesheet project.json --out exports/
    python -m app.scripts.export_maker timesheets projects.json --paid
    python -m app.scripts.export_maker invoice invoice.json
"""

import asyncio
import argparse
import sys
import json
import time
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

KINDS = ("proposal", "timesheet", "timesheets", "invoice")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a PDF export")
    parser.add_argument("kind", choices=KINDS, help="Document type")
    parser.add_argument("input", type=Path, help="JSON input file")
    parser.add_argument("--out", type=Path, default=None, help="Output directory")
    parser.add_argument(
        "--paid",
        action="store_true",
        help="timesheets: export paid projects (default: pending)",
    )
    return parser


async def render(kind: str, payload, paid: bool):
    from app.models import InvoiceExportInput, ProposalInput, TimesheetExportInput
    from app.services import (
        export_all_timesheets,
        export_invoice_pdf,
        export_timesheet_pdf,
        generate_offer_proposal_pdf,
    )

    if kind == "proposal":
        return [await generate_offer_proposal_pdf(ProposalInput.model_validate(payload))]
    if kind == "timesheet":
        return [await export_timesheet_pdf(TimesheetExportInput.model_validate(payload))]
    if kind == "timesheets":
        projects = [TimesheetExportInput.model_validate(item) for item in payload]
        return await export_all_timesheets(projects, is_paid=paid)
    return [await export_invoice_pdf(InvoiceExportInput.model_validate(payload))]


async def main(argv=None):
    args = build_parser().parse_args(argv)

    from app.exceptions import DocumentExportError
    from app.services import ExportStorage, get_export_storage

    print('\n' + '=' * 70)
    print(f'{args.kind.capitalize()} export started')
    print(f'Start time: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    print('=' * 70)

    if not args.input.exists():
        print(f'Input file not found: {args.input}')
        return 1

    with open(args.input, 'r', encoding='utf-8') as f:
        payload = json.load(f)

    storage = ExportStorage(args.out) if args.out else get_export_storage()
    total_start = time.time()

    try:
        documents = await render(args.kind, payload, args.paid)
        paths = [await storage.save(document, overwrite=False) for document in documents]
    except DocumentExportError as e:
        print(f'\nExport failed [{e.error_code}]: {e.message}')
        return 1

    total_time = time.time() - total_start

    print('\n' + '=' * 70)
    print('Export finished')
    print('=' * 70)
    for document, path in zip(documents, paths):
        print(f'\n  Document ID: {document.document_id}')
        print(f'  Pages: {document.page_count}')
        print(f'  Size: {document.size_bytes:,} bytes')
        print(f'  Saved: {path}')
    print(f'\n  Total time: {total_time:.1f}s')
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
