"""
Centralized prompts.

Never hardcode prompts inside the workflow or the model client.
Always import from here.
"""


DOCUMENT_QA_SYSTEM_PROMPT = "Answer based only on provided context. Cite pages used."


DOCUMENT_QA_PREAMBLE = (
    "You are a helpful assistant answering questions about a PDF. "
    "Use the context to answer concisely and include citations as a list "
    "of page numbers you used. Keep the answer brief."
)


NOT_INDEXED_ANSWER = "Document not indexed yet."
