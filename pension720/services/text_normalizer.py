"""Turn the raw source page into one flat, whitespace-normalized string."""

from __future__ import annotations

import re

_SCRIPT_RE = re.compile(r"<script[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[\s\S]*?</style>", re.IGNORECASE)
_BLOCK_END_RE = re.compile(r"<br\b[^>]*>|</p>|</div>|</tr>|</li>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_HSPACE_RE = re.compile(r"[ \t]+")
_LEADING_SPACE_RE = re.compile(r"\n\s+")
_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
_BLANK_LINES_RE = re.compile(r"\n{2,}")
_CITATION_OPEN_RE = re.compile(r"【\d+†")
_WHITESPACE_RE = re.compile(r"\s+")

_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&nbsp;", " "),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&#39;", "'"),
    ("&quot;", '"'),
)


def decode_entities(text: str) -> str:
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return text


def html_to_text(html: str) -> str:
    """Strip markup, keeping block boundaries as line breaks."""

    text = _SCRIPT_RE.sub(" ", html or "")
    text = _STYLE_RE.sub(" ", text)
    text = _BLOCK_END_RE.sub("\n", text)
    text = decode_entities(text)
    text = _TAG_RE.sub(" ", text)
    text = text.replace("\r", "")
    text = _HSPACE_RE.sub(" ", text)
    text = _TRAILING_SPACE_RE.sub("\n", text)
    text = _LEADING_SPACE_RE.sub("\n", text)
    text = _BLANK_LINES_RE.sub("\n", text)
    return text.strip()


def scrub_noise(text: str) -> str:
    """Drop citation markers (``【12†`` ... ``】``) and flatten all whitespace."""

    text = _CITATION_OPEN_RE.sub("", text or "")
    text = text.replace("】", "")
    text = text.replace("\u00a0", " ")
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize(html: str) -> str:
    """Full normalization used ahead of draw extraction."""

    return scrub_noise(html_to_text(html).replace("\n", " "))
