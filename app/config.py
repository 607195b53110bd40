# app/config.py
"""
Configuration for the PDF chat RAG service.

This file centralizes all tunable parameters for the RAG pipeline.
Values can be overridden through environment variables or a .env file
in the working directory.
"""

import os

from dotenv import find_dotenv, load_dotenv


load_dotenv(find_dotenv(usecwd=True))


# ========== OPENAI CONNECTION ==========

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_PROJECT = os.getenv("OPENAI_PROJECT") or None


def get_api_key():
    """
    Read the credential at call time so the server can start without one.
    """
    return os.getenv("OPENAI_API_KEY") or None


# ========== EMBEDDING CONFIGURATION ==========

MODEL_EMBED = os.getenv("MODEL_EMBED", "text-embedding-3-small")


# ========== DOCUMENT PROCESSING ==========

# Fixed-length character windows, no overlap
CHUNK_MAX_CHARS = 1500

# File upload limits
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
UPLOAD_DIR = os.getenv("UPLOAD_DIR", "storage/uploads")


# ========== RETRIEVAL CONFIGURATION ==========

# Number of pages handed to the chat model. Fixed, not a tunable.
TOP_K = 4

# Characters of each retrieved page included in the prompt
CONTEXT_CHARS_PER_PAGE = 1200


# ========== LLM CONFIGURATION ==========

MODEL_CHAT = os.getenv("MODEL_CHAT", "gpt-4o-mini")

LLM_TEMPERATURE = 0.2


# ========== SERVER ==========

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE") or None


# ========== DESIGN TRADE-OFFS (DOCUMENTED) ==========

"""
TRADE-OFF DECISIONS:

1. CHUNK_MAX_CHARS = 1500 characters:
   - Only exists to stay under the embedding input limit
   - Chunk vectors are averaged back into one vector per page

2. TOP_K = 4 pages:
   - Four pages of 1200 characters keep the prompt small
   - Citations are the retrieved pages, not pages parsed from the answer

3. In-memory index (no persistent store):
   - Trade-off: zero setup, simple deployment
   - Limitation: index lost on restart, single process only
"""
