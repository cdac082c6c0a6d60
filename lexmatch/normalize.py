from __future__ import annotations

"""
Text normalization and tokenization for the lexical matching engine.

Every document that reaches the engine (profile blobs, certificate
titles, task descriptions, search queries) goes through
:func:`tokenize`.  The tokenizer is deliberately simple: lower-case,
strip diacritics so that Portuguese inputs such as "gestão" and
"gestao" collide, turn anything that is not an ASCII letter or digit
into a separator, and drop tokens below the configured minimum length.

:func:`basic_clean` is the heavier pre-cleaning pipeline used on raw
caller input (HTML fragments, odd unicode, runaway whitespace) before
it is assembled into candidate text.
"""

import re
import unicodedata
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup
from loguru import logger

from .config import MAX_INPUT_CHARS, MIN_TOKEN_LENGTH


# ---------------------------
# Basic helpers
# ---------------------------

def clamp_text_length(text: str, max_chars: int = MAX_INPUT_CHARS) -> str:
    """
    Hard cap on input size so a pasted resume cannot blow up a single
    scoring call.
    """
    if not isinstance(text, str):
        text = str(text)
    if len(text) <= max_chars:
        return text
    return text[:max_chars]


# A real tag: "<p>", "</b>", "<br/>", '<a href="...">' or a comment.
HTML_TAG_RE = re.compile(r"</?[a-zA-Z][^<>]*>|<!--")


def looks_like_html(text: str) -> bool:
    return bool(text) and HTML_TAG_RE.search(text) is not None


def strip_html(raw: str) -> str:
    """
    Strip HTML tags using BeautifulSoup and clean up the whitespace
    left behind.  Text without a complete tag (e.g. "Python<SQL") is
    returned untouched, and so is the input if parsing fails.
    """
    if not raw:
        return ""
    if not looks_like_html(raw):
        return raw
    try:
        soup = BeautifulSoup(raw, "lxml")
        text = soup.get_text(" ", strip=True)
        text = normalize_whitespace(text)
        # Remove spaces before common punctuation marks
        return re.sub(r"\s+([.,!?;:])", r"\1", text)
    except Exception as e:
        logger.warning("HTML stripping failed, keeping raw text: {}", e)
        return raw


def normalize_unicode(text: str) -> str:
    """NFC-normalize so visually identical strings compare equal."""
    if not text:
        return ""
    return unicodedata.normalize("NFC", text)


def normalize_whitespace(text: str) -> str:
    """Collapse all whitespace runs into a single space and strip edges."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def strip_diacritics(text: str) -> str:
    """
    Decompose ``text`` (NFD) and drop the combining marks, so
    "Avançado" becomes "Avancado".
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


# ---------------------------
# Tokenization
# ---------------------------

NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def tokenize(text: Optional[str], min_length: int = MIN_TOKEN_LENGTH) -> List[str]:
    """
    Convert raw text into an ordered list of normalized terms.

    Steps: lower-case, strip diacritics, replace every character that is
    not ``[a-z0-9]`` with a separator, split, and drop empty tokens and
    tokens shorter than ``min_length``.  ``None`` and punctuation-only
    strings yield an empty list.
    """
    if not text:
        return []
    folded = strip_diacritics(text.lower())
    return [tok for tok in NON_ALNUM_RE.sub(" ", folded).split() if len(tok) >= min_length]


def detokenize(tokens: Iterable[str]) -> str:
    """Join tokens back into a single-space separated string."""
    return " ".join(tokens)


# ---------------------------
# High-level normalization pipelines
# ---------------------------

def basic_clean(text: Optional[str]) -> str:
    """
    End-to-end cleaning for caller supplied text:

    - clamp length
    - strip HTML
    - normalize unicode
    - normalize whitespace
    """
    if text is None:
        return ""
    text = clamp_text_length(str(text))
    text = strip_html(text)
    text = normalize_unicode(text)
    return normalize_whitespace(text)
