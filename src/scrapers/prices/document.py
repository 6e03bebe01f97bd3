"""
Page Document
Read-only, DOM-queryable view of a rendered product page
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError


class PageDocument:
    """
    Thin wrapper around a BeautifulSoup tree.

    Policies only ever need "first element matching a CSS selector" and
    "trimmed text of an element", optionally scoped to a subtree.
    """

    def __init__(self, root):
        self._root = root

    @classmethod
    def from_html(cls, html: str) -> 'PageDocument':
        """
        Parse page HTML (usually Playwright's page.content()).

        Args:
            html: Full HTML source of the rendered page

        Returns:
            PageDocument rooted at the whole document
        """
        return cls(BeautifulSoup(html or '', 'html.parser'))

    @property
    def root(self):
        return self._root

    def select_first(self, selector: str) -> Optional[Tag]:
        """First element in document order matching selector, or None."""
        try:
            return self._root.select_one(selector)
        except SelectorSyntaxError:
            return None

    def select_all(self, selector: str) -> List[Tag]:
        try:
            return self._root.select(selector)
        except SelectorSyntaxError:
            return []

    @staticmethod
    def text_of(element: Tag) -> str:
        """Concatenated text content of element, trimmed."""
        return element.get_text().strip()

    def scope(self, selectors: str) -> 'PageDocument':
        """
        Narrow the document to the first element matching selectors.

        Falls back to <body>, then to the whole document, when nothing matches.
        """
        element = self.select_first(selectors)
        if element is None:
            element = self._root.find('body') or self._root
        return PageDocument(element)
