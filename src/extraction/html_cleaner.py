"""HTML to plain text conversion."""

from __future__ import annotations

import html
import re

_SCRIPT_RE = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_STYLE_RE = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
# Unterminated leftovers would otherwise leak through the generic tag stripper
_DANGLING_RE = re.compile(r"<(?:script|style)\b.*|<!--.*", re.IGNORECASE | re.DOTALL)
_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_BLOCK_RE = re.compile(r"</?(?:p|div|h[1-6]|li)\b[^>]*>", re.IGNORECASE)
# Only "<" followed by a tag name, closing slash or "!" starts markup
_TAG_RE = re.compile(r"<(?:[A-Za-z!]|/[A-Za-z])[^>]*>")
# Decoded entities must not reintroduce script, style or comment openers
_MARKER_RE = re.compile(r"<(?=script|style|!--)", re.IGNORECASE)
_HSPACE_RE = re.compile(r"[^\S\n]+")
_BLANK_LINES_RE = re.compile(r" ?\n[\s]*")


def clean_html(markup: str) -> str:
    """Strip markup from *markup* and return readable plain text.

    Script, style and comment blocks are removed with their content, line
    breaks and block-level tags become newlines, entities are decoded and
    whitespace is normalised to single spaces and single newlines.
    """
    if not markup:
        return ""

    text = _SCRIPT_RE.sub("", markup)
    text = _STYLE_RE.sub("", text)
    text = _COMMENT_RE.sub("", text)
    text = _DANGLING_RE.sub("", text)
    text = _BREAK_RE.sub("\n", text)
    text = _BLOCK_RE.sub("\n", text)
    text = _TAG_RE.sub("", text)
    text = html.unescape(text)
    text = _MARKER_RE.sub("", text)

    text = _HSPACE_RE.sub(" ", text)
    text = _BLANK_LINES_RE.sub("\n", text)
    return text.strip()
