"""
HTML helpers (markup -> queryable tree).

Thin layer over BeautifulSoup so extractors only deal with selectors
and plain strings.
"""

from __future__ import annotations

import re
from typing import List

from bs4 import BeautifulSoup, Tag


_CONTROL_WS = re.compile(r"[\n\t]")


def parse_markup(body: str) -> BeautifulSoup:
    """
    Parse raw markup. html.parser is lenient, broken HTML still yields a tree.
    """
    return BeautifulSoup(body, "html.parser")


def select(doc: BeautifulSoup | Tag, selector: str) -> List[Tag]:
    return list(doc.select(selector))


def node_text(node: Tag | None) -> str:
    if node is None:
        return ""
    return node.get_text()


def clean_text(text: str) -> str:
    """
    Remove embedded newline/tab characters and trim surrounding whitespace.

    Only tabs inside text nodes survive to this point: newer bs4 releases
    turn whitespace-only nodes between tags into a single space while parsing.
    """
    return _CONTROL_WS.sub("", text).strip()


def field_text(node: BeautifulSoup | Tag, selector: str) -> str:
    """
    Text of every element matching `selector` inside `node`, concatenated.

    Returns "" when nothing matches.
    """
    return "".join(node_text(el) for el in node.select(selector))
