"""
Element collection passes.

Runs a fixed sequence of category passes over a document tree and turns each
matched node into an ElementRecord: element type, a human readable label and the
id/class hint a UI test can use to locate it again.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from element_nodes import DocumentTree, ElementNode


SELECTOR_ID = "id"
SELECTOR_CLASS = "class"
SELECTOR_NONE = "none"
NO_IDENTIFIER = "no-id-or-class"

TRUNCATE_LIMIT = 100
GENERIC_TEXT_LIMIT = 200
LINK_FALLBACK = "[link]"

BUTTON_SELECTOR = 'button, input[type="button"], input[type="submit"]'
TEXT_INPUT_SELECTOR = ", ".join(
    [f'input[type="{t}"]' for t in ["text", "password", "email", "number", "search", "tel", "url"]]
    + ["textarea"]
)
TOGGLE_SELECTOR = 'input[type="checkbox"], input[type="radio"]'
SELECT_SELECTOR = "select"
LINK_SELECTOR = "a"
HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"
STATIC_TEXT_SELECTOR = "p, span, div, label"
TABLE_HEADER_SELECTOR = "th"
IMPORTANT_SELECTOR = "button, input, select, a, h1, h2, h3, h4, h5, h6"


@dataclass(frozen=True)
class ElementRecord:
    element_type: str
    text_content: str
    selector_type: str
    selector_value: str

    @property
    def has_identifier(self) -> bool:
        return self.selector_type != SELECTOR_NONE


def utf16_length(text: str) -> int:
    """Length as the browser counts it, in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def truncate(text: str, limit: int = TRUNCATE_LIMIT) -> str:
    if utf16_length(text) <= limit:
        return text
    # A surrogate pair split at the cut becomes U+FFFD once written as UTF-8.
    head = text.encode("utf-16-le")[:limit * 2].decode("utf-16-le", errors="replace")
    return head + "..."


def resolve_identifier(node: ElementNode) -> Tuple[str, str]:
    if node.id:
        return SELECTOR_ID, node.id
    class_name = node.class_name
    if class_name and class_name.strip():
        return SELECTOR_CLASS, class_name.strip()
    return SELECTOR_NONE, NO_IDENTIFIER


def element_type_of(node: ElementNode) -> str:
    if node.tag_name == "input":
        return f'input[type="{node.input_type}"]'
    if node.tag_name == "textarea":
        return 'textarea[type="textarea"]'
    return node.tag_name


def label_text(document: DocumentTree, node: ElementNode) -> Optional[str]:
    label = document.label_for(node.id)
    return label.text_content().strip() if label is not None else None


def extract_label(document: DocumentTree, node: ElementNode) -> str:
    tag = node.tag_name

    if tag == "input":
        input_type = node.input_type
        if input_type in ("button", "submit"):
            return node.value or node.placeholder or f"[{input_type} button]"
        if input_type in ("checkbox", "radio"):
            text = label_text(document, node)
            return text if text is not None else f"[{input_type}]"
        return node.placeholder or f"[{input_type} input]"

    if tag == "select":
        text = label_text(document, node)
        if text is not None:
            return text
        options = ", ".join(opt.text_content().strip() for opt in node.options())
        return truncate(options)

    if tag == "button":
        return node.text_content().strip() or "[button]"

    if tag == "a":
        return node.text_content().strip() or LINK_FALLBACK

    return truncate(node.text_content().strip())


class ElementCollector:
    """Collects element records from one document in a single synchronous pass."""

    def __init__(self, document: DocumentTree):
        self.document = document
        self.records: List[ElementRecord] = []

    def collect_all(self) -> List[ElementRecord]:
        self.collect_buttons()
        self.collect_text_inputs()
        self.collect_toggles()
        self.collect_selects()
        self.collect_links()
        self.collect_headings()
        self.collect_static_text()
        self.collect_table_headers()
        return self.records

    def add(self, node: ElementNode, text: str) -> None:
        if not text:
            return
        selector_type, selector_value = resolve_identifier(node)
        self.records.append(ElementRecord(
            element_type=element_type_of(node),
            text_content=text,
            selector_type=selector_type,
            selector_value=selector_value,
        ))

    def collect_buttons(self) -> None:
        for node in self.document.select(BUTTON_SELECTOR):
            self.add(node, extract_label(self.document, node))

    def collect_text_inputs(self) -> None:
        for node in self.document.select(TEXT_INPUT_SELECTOR):
            text = label_text(self.document, node)
            self.add(node, text if text is not None else extract_label(self.document, node))

    def collect_toggles(self) -> None:
        for node in self.document.select(TOGGLE_SELECTOR):
            self.add(node, extract_label(self.document, node))

    def collect_selects(self) -> None:
        for node in self.document.select(SELECT_SELECTOR):
            self.add(node, extract_label(self.document, node))

    def collect_links(self) -> None:
        for node in self.document.select(LINK_SELECTOR):
            text = extract_label(self.document, node)
            if text != LINK_FALLBACK:
                self.add(node, text)

    def collect_headings(self) -> None:
        for node in self.document.select(HEADING_SELECTOR):
            self.add(node, extract_label(self.document, node))

    def collect_static_text(self) -> None:
        # Nested containers may each qualify; both rows are kept.
        for node in self.document.select(STATIC_TEXT_SELECTOR):
            if not node.has_direct_text():
                continue
            text = node.text_content().strip()
            if not 0 < utf16_length(text) < GENERIC_TEXT_LIMIT:
                continue
            if node.contains(IMPORTANT_SELECTOR):
                continue
            self.add(node, truncate(text))

    def collect_table_headers(self) -> None:
        for node in self.document.select(TABLE_HEADER_SELECTOR):
            self.add(node, extract_label(self.document, node))


def collect_elements(document: DocumentTree) -> List[ElementRecord]:
    return ElementCollector(document).collect_all()
