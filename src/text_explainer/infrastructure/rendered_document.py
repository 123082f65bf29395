"""Read-only rendered view of a Markdown note."""

from __future__ import annotations

import mistune
from bs4 import BeautifulSoup

from ..domain.entities.selection import RangeSelection


class RenderedDocument:
    """Markdown rendered to HTML and parsed into a node tree.

    Selections on this surface are text ranges over the rendered text, not
    over the Markdown source.
    """

    def __init__(self, markdown_text: str):
        self.html = mistune.html(markdown_text)
        self.soup = BeautifulSoup(self.html, "html5lib")

    @property
    def text(self) -> str:
        return self.soup.get_text()

    def find_selection(self, text: str, occurrence: int = 0) -> RangeSelection | None:
        """Range starting at the Nth occurrence of ``text`` in the rendered text."""
        if not text:
            return None
        rendered = self.text
        index = -1
        for _ in range(occurrence + 1):
            index = rendered.find(text, index + 1)
            if index == -1:
                return None

        position = 0
        for node in self.soup.strings:
            if position + len(node) > index:
                return RangeSelection(node=node, offset=index - position, selected_text=text)
            position += len(node)
        return None
