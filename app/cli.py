# app/cli.py
"""
Command line entry point.

    pdfchat serve
    pdfchat ask report.pdf "What are the conclusions?"

``ask`` runs extraction, indexing and answering in process against a fresh
in-memory store, so no server is needed.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from app.config import HOST, LOG_FILE, LOG_LEVEL, PORT
from app.errors import RagError
from app.llm.client import LLMClient
from app.memory.embedder import Embedder
from app.memory.indexer import index_document
from app.memory.loader import extract_pages
from app.memory.store import InMemoryDocumentStore
from app.observability.logger import setup_logging
from app.workflow.document_qa import answer_question


async def ask_pdf(path: str, question: str, embedder=None, llm_client=None) -> dict:

    store = InMemoryDocumentStore()
    embedder = embedder or Embedder()
    llm_client = llm_client or LLMClient()

    doc_id = path

    await index_document(
        doc_id=doc_id,
        pages=extract_pages(path),
        embedder=embedder,
        store=store,
    )

    return await answer_question(
        doc_id=doc_id,
        question=question,
        embedder=embedder,
        store=store,
        llm_client=llm_client,
    )


def build_parser() -> argparse.ArgumentParser:

    parser = argparse.ArgumentParser(prog="pdfchat", description="Chat with a PDF")

    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=HOST)
    serve.add_argument("--port", type=int, default=PORT)

    ask = sub.add_parser("ask", help="Index a PDF and answer one question")
    ask.add_argument("pdf")
    ask.add_argument("question")

    return parser


def main(argv: Optional[List[str]] = None) -> int:

    args = build_parser().parse_args(argv)

    if args.command == "serve":

        import uvicorn

        uvicorn.run("app.main:app", host=args.host, port=args.port)
        return 0

    # Keep stdout for the answer unless more logging is asked for
    setup_logging(log_level=LOG_LEVEL if LOG_FILE else "WARNING", log_file=LOG_FILE)

    try:
        result = asyncio.run(ask_pdf(args.pdf, args.question))
    except RagError as e:
        print(f"Error ({type(e).__name__}): {e}", file=sys.stderr)
        return 1

    print(result["answer"])

    pages = ", ".join(str(c["pageNumber"]) for c in result["citations"])
    print(f"\nPages: {pages}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
