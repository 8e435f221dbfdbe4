"""Inline emphasis markup allowed inside node content."""

from __future__ import annotations

import re

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for inline markup handling (pip install beautifulsoup4)."
    ) from exc


ALLOWED_TAGS = frozenset({"strong", "b", "em", "i", "u", "br"})
_DROPPED_TAGS = ["script", "style", "noscript"]


def sanitize_inline(content: str) -> str:
    """Reduce ``content`` to plain text plus allowed emphasis tags.

    Allowed tags lose their attributes, other tags are unwrapped and
    script/style bodies are removed.
    """
    if "<" not in content:
        return content
    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(_DROPPED_TAGS):
        tag.decompose()
    for tag in soup.find_all(True):
        if tag.name in ALLOWED_TAGS:
            tag.attrs = {}
        else:
            tag.unwrap()
    return _render(soup)


def plain_text(content: str) -> str:
    """Return ``content`` with every tag stripped."""
    if "<" not in content:
        return content
    return BeautifulSoup(content, "html.parser").get_text()


def toggle_bold(content: str, selected_text: str) -> str:
    """Toggle ``<strong>`` around ``selected_text``.

    When the selection is already bold every bold occurrence is unwrapped;
    otherwise the first plain occurrence is wrapped. Content that does not
    contain the selection is returned unchanged.
    """
    if not selected_text:
        return content

    soup = BeautifulSoup(content, "html.parser")
    bold = [tag for tag in soup.find_all(["strong", "b"]) if tag.get_text() == selected_text]
    if bold:
        for tag in bold:
            tag.unwrap()
        return _render(soup)

    for text_node in soup.find_all(string=re.compile(re.escape(selected_text))):
        if text_node.find_parent(["strong", "b"]) is not None:
            continue
        before, _, after = str(text_node).partition(selected_text)
        strong = soup.new_tag("strong")
        strong.string = selected_text
        text_node.replace_with(before, strong, after)
        return _render(soup)
    return content


def _render(soup: BeautifulSoup) -> str:
    return str(soup)
