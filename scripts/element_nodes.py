"""
Document tree wrappers used by the element extractor.

Wraps a BeautifulSoup tree so the collection passes can ask the same questions
a browser console script would ask of the live DOM: tag name, id, class name,
textContent, direct text children, descendant selector matches and label lookup.
"""

import re
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag


INPUT_TYPES = {
    "hidden",
    "text",
    "search",
    "tel",
    "url",
    "email",
    "password",
    "date",
    "month",
    "week",
    "time",
    "datetime-local",
    "number",
    "range",
    "color",
    "checkbox",
    "radio",
    "file",
    "submit",
    "image",
    "reset",
    "button",
}


class ElementExportError(Exception):
    """Base error for a failed element export run."""


class DocumentUnavailableError(ElementExportError):
    pass


def is_text_node(node) -> bool:
    # Comments, CDATA, doctypes and processing instructions are not text nodes.
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


class ElementNode:
    def __init__(self, tag: Tag):
        self.tag = tag

    def __repr__(self) -> str:
        return f"ElementNode(<{self.tag_name}>)"

    @property
    def tag_name(self) -> str:
        return (self.tag.name or "").lower()

    def attr(self, name: str) -> Optional[str]:
        return self.tag.get(name)

    @property
    def id(self) -> str:
        return self.attr("id") or ""

    @property
    def class_name(self) -> Optional[str]:
        """Raw class attribute, or None where the DOM has no string className (SVG)."""
        if self.tag_name == "svg" or self.tag.find_parent("svg") is not None:
            return None
        return self.attr("class") or ""

    @property
    def input_type(self) -> str:
        raw = (self.attr("type") or "").lower()
        return raw if raw in INPUT_TYPES else "text"

    @property
    def value(self) -> str:
        return self.attr("value") or ""

    @property
    def placeholder(self) -> str:
        return self.attr("placeholder") or ""

    def text_content(self) -> str:
        return "".join(str(node) for node in self.tag.descendants if is_text_node(node))

    def has_direct_text(self) -> bool:
        return any(is_text_node(child) and child.strip() for child in self.tag.children)

    def contains(self, selector: str) -> bool:
        return self.tag.select_one(selector) is not None

    def options(self) -> List["ElementNode"]:
        """Options of a select, including those grouped under optgroup."""
        result = []
        for child in self.tag.children:
            if not isinstance(child, Tag):
                continue
            if child.name == "option":
                result.append(ElementNode(child))
            elif child.name == "optgroup":
                result.extend(ElementNode(opt) for opt in child.find_all("option", recursive=False))
        return result


class DocumentTree:
    def __init__(self, soup: BeautifulSoup, title: Optional[str] = None):
        self.soup = soup
        self._title = title

    @property
    def title(self) -> str:
        if self._title is not None:
            return collapse_whitespace(self._title)
        for tag in self.soup.find_all("title"):
            if tag.find_parent("svg") is None:
                return collapse_whitespace(ElementNode(tag).text_content())
        return ""

    def select(self, selector: str) -> List[ElementNode]:
        return [ElementNode(tag) for tag in self.soup.select(selector)]

    def label_for(self, element_id: str) -> Optional[ElementNode]:
        if not element_id:
            return None
        label = self.soup.find("label", attrs={"for": element_id})
        return ElementNode(label) if label is not None else None


def detach_inert_content(soup: BeautifulSoup) -> None:
    """Reshape parsed markup the way a scripting-enabled browser holds it.

    Template children live in a separate content fragment that selectors never
    reach, and noscript content is a single raw text node.
    """
    for template in soup.find_all("template"):
        if not template.decomposed:
            template.clear(decompose=True)
    for noscript in soup.find_all("noscript"):
        if noscript.decomposed:
            continue
        raw = noscript.decode_contents()
        noscript.clear(decompose=True)
        if raw:
            noscript.append(NavigableString(raw))


def parse_html(html: str, title: Optional[str] = None) -> DocumentTree:
    if not html or not html.strip():
        raise DocumentUnavailableError("No HTML document available to extract elements from")
    # Keep class as the raw attribute string, the way element.className reads.
    soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)
    detach_inert_content(soup)
    return DocumentTree(soup, title=title)
