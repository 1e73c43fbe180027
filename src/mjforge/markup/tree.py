"""
Tree parser and serializer for source markup and compiled output.

Source markup is parsed as XML inside a synthetic wrapper element so that body
fragments and full documents share one code path. Compiled output is parsed
with the lenient HTML parser.
"""

import re
from typing import Iterator, List, Optional

from lxml import etree
from lxml import html as lxml_html

from mjforge.exceptions import MarkupParseError
from mjforge.logging_config import logger
from .config import MARKUP_CONFIG

# An XML declaration is only legal at the very start, so it is kept outside the wrapper
PROLOG_PATTERN = re.compile(r'^\s*<\?xml[^>]*\?>\s*')
WHITESPACE_PATTERN = re.compile(r'\s+')


def normalize_whitespace(text: Optional[str]) -> str:
    """Trim and collapse internal whitespace runs to single spaces."""
    if not text:
        return ""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def text_content(element) -> str:
    """
    Concatenated text of an element and its descendants.

    Comments and processing instructions contribute only their tails.
    """
    parts: List[str] = []

    def walk(node):
        if isinstance(node.tag, str) and node.text:
            parts.append(node.text)
        for child in node:
            walk(child)
            if child.tail:
                parts.append(child.tail)

    walk(element)
    return "".join(parts)


def normalized_content(element) -> str:
    return normalize_whitespace(text_content(element))


class SourceTree:
    """
    Parsed authoring markup.

    The wrapper element is never serialized; everything inside it,
    including whitespace and comments, round-trips unchanged.
    """

    def __init__(self, root, prolog: str = ""):
        self.root = root
        self.prolog = prolog

    @classmethod
    def parse(cls, text: str) -> "SourceTree":
        """
        Parse source markup.

        Args:
            text: Markup fragment or full document

        Returns:
            SourceTree

        Raises:
            MarkupParseError: If the markup is not well-formed
        """
        if text is None:
            raise MarkupParseError("source markup", "no markup given")

        prolog = ""
        match = PROLOG_PATTERN.match(text)
        if match:
            prolog = match.group(0)
            text = text[match.end():]

        wrapper = MARKUP_CONFIG["wrapper_tag"]
        parser = etree.XMLParser(
            resolve_entities=False,
            strip_cdata=False,
            remove_blank_text=False,
        )
        try:
            root = etree.fromstring(f"<{wrapper}>{text}</{wrapper}>", parser)
        except etree.XMLSyntaxError as e:
            raise MarkupParseError("source markup", str(e)) from e

        return cls(root, prolog)

    def serialize(self) -> str:
        wrapper = MARKUP_CONFIG["wrapper_tag"]
        result = etree.tostring(self.root, encoding="unicode")

        if result == f"<{wrapper}/>":
            return self.prolog

        open_tag = f"<{wrapper}>"
        close_tag = f"</{wrapper}>"
        return self.prolog + result[len(open_tag):-len(close_tag)]

    def iter_elements(self) -> Iterator:
        """Yield every real element in document (pre-order) order, wrapper excluded."""
        for element in self.root.iter(etree.Element):
            if element is self.root:
                continue
            yield element

    def iter_content_elements(self) -> Iterator:
        """
        Yield body elements in pre-order, skipping the document head.

        Elements under the head are attribute defaults and declarations
        (e.g. `<mj-attributes><mj-text color=.../>`), never components.
        """
        head_tag = MARKUP_CONFIG["head_tag"]

        def walk(node):
            for child in node.iterchildren(etree.Element):
                if child.tag == head_tag:
                    continue
                yield child
                yield from walk(child)

        return walk(self.root)

    def find_by_tag(self, tag: str) -> List:
        return [el for el in self.iter_elements() if el.tag == tag]

    def find_first(self, tag: str):
        for element in self.iter_elements():
            if element.tag == tag:
                return element
        return None


class CompiledTree:
    """
    Parsed compiled output (HTML).

    Disposable: regenerated every pass and only annotated in memory.
    """

    def __init__(self, document):
        self.document = document

    @classmethod
    def parse(cls, html: str) -> "CompiledTree":
        """
        Parse compiled HTML.

        Raises:
            MarkupParseError: If the output is empty or cannot be parsed
        """
        if not html or not html.strip():
            raise MarkupParseError("compiled output", "document is empty")

        parser = lxml_html.HTMLParser(remove_comments=False)
        try:
            document = lxml_html.document_fromstring(html, parser=parser)
        except (etree.LxmlError, ValueError) as e:
            raise MarkupParseError("compiled output", str(e)) from e

        return cls(document)

    def serialize(self) -> str:
        # Serializing the tree (not the root) keeps the doctype
        return etree.tostring(
            self.document.getroottree(),
            method="html",
            encoding="unicode",
        )

    def iter_elements(self) -> Iterator:
        return self.document.iter(etree.Element)

    def find_by_class(self, class_name: str) -> List:
        """All elements whose class attribute contains class_name as a token."""
        matches = []
        for element in self.iter_elements():
            classes = (element.get("class") or "").split()
            if class_name in classes:
                matches.append(element)
        logger.debug(f"Compiled class '{class_name}': {len(matches)} element(s)")
        return matches
