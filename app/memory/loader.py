# app/memory/loader.py

"""
Server-side PDF page extraction.

Produces the same ``[{pageNumber, text}]`` shape a browser client sends to
``/api/index``, so the CLI can run the whole pipeline without a frontend.
"""

import logging
from typing import List

from pypdf import PdfReader

from app.models import PageInput

logger = logging.getLogger(__name__)


def extract_pages(file_path: str) -> List[PageInput]:
    """
    One entry per PDF page, 1-based page numbers.

    Pages without extractable text become empty strings so that page
    numbering stays aligned with the document.
    """

    reader = PdfReader(file_path)

    pages = []

    for number, page in enumerate(reader.pages, start=1):

        text = page.extract_text() or ""

        pages.append(PageInput(pageNumber=number, text=text))

    logger.info(
        "PDF text extracted",
        extra={
            "source": file_path,
            "pages": len(pages),
            "empty_pages": sum(1 for p in pages if not p.text),
        },
    )

    return pages
