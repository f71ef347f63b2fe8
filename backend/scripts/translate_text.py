#!/usr/bin/env python3
"""
Translate a plain-text file from the command line.

Paragraphs are separated by blank lines. Progress events are printed to
stdout as NDJSON, one object per line, ending with a ``done`` or ``error``
record, the same stream the ``/api/v1/translate/stream`` route returns.

Usage:
    cd backend
    python scripts/translate_text.py story.txt

    # Write the final result to a file and skip saving to history:
    python scripts/translate_text.py story.txt --output story.json --no-save
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from editorial.config import settings
from editorial.core.history.store import SQLHistoryStore
from editorial.core.translation.models import DoneEvent, ErrorEvent
from editorial.core.translation.orchestrator import TranslationService
from editorial.models.database import base as database
from editorial.utils.text import split_paragraphs


async def run(args: argparse.Namespace) -> int:
    text = Path(args.input).read_text(encoding="utf-8")
    paragraphs = split_paragraphs(text)

    store = None
    if not args.no_save and database.async_session_maker is not None:
        await database.init_db()
        store = SQLHistoryStore(database.async_session_maker)

    if args.chunk_size:
        settings.chunk_size = args.chunk_size

    service = TranslationService(settings=settings, history_store=store)

    exit_code = 1
    async for event in service.translate_stream(paragraphs):
        sys.stdout.write(event.to_ndjson())
        sys.stdout.flush()

        if isinstance(event, DoneEvent):
            exit_code = 0
            if args.output:
                Path(args.output).write_text(
                    json.dumps(
                        event.result.model_dump(by_alias=True), ensure_ascii=False, indent=2
                    ),
                    encoding="utf-8",
                )
        elif isinstance(event, ErrorEvent):
            exit_code = 1

    return exit_code


def main():
    parser = argparse.ArgumentParser(
        description="Translate an English text file into Chinese with literary analysis"
    )
    parser.add_argument("input", help="Plain-text file, paragraphs separated by blank lines")
    parser.add_argument("--output", "-o", help="Write the final result JSON to this file")
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not save the result to translation history",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=None,
        help=f"Characters per request (default {settings.chunk_size})",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log to stderr")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
