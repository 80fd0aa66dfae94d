from __future__ import annotations

TRUNCATION_MARKER = "... [content truncated]"
CHARS_PER_TOKEN = 4


def truncate_text(text: str, max_tokens: int = 1500) -> str:
    """Bound text to roughly ``max_tokens`` tokens.

    The token count is approximated as one token per four characters. This is
    a heuristic for English prose only; real tokenizers can differ noticeably
    for code, URLs or non-Latin scripts.
    """
    tokens = len(text) // CHARS_PER_TOKEN
    if tokens <= max_tokens:
        return text

    return text[: max(max_tokens, 0) * CHARS_PER_TOKEN] + TRUNCATION_MARKER
