"""
A minimal element/text tree for the HTML to markdown converter.

The converter only needs tag names, attribute lookup and ordered
children, so any HTML representation can be fed to it once converted to
these nodes.  parse_html builds the tree from an HTML string with
BeautifulSoup.

"""

import logging

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from .common import Dumper

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class Node(Dumper):

    parent = None

    @property
    def text_content(self):
        return ''


class Text(Node):

    def __init__(self, data):
        super(Text, self).__init__()
        self.data = data

    @property
    def text_content(self):
        return self.data


class Element(Node):

    def __init__(self, tag, attrs=None, children=None):
        super(Element, self).__init__()
        self.tag = tag.lower()
        self.attrs = dict(attrs or {})
        self.children = []
        for child in children or []:
            self.append(child)

    def append(self, child):
        child.parent = self
        self.children.append(child)
        return child

    def get(self, name, default=None):
        return self.attrs.get(name, default)

    @property
    def elements(self):
        """ Child elements, text nodes left out.
        """
        return [child for child in self.children if isinstance(child, Element)]

    @property
    def text_content(self):
        return ''.join(child.text_content for child in self.children)

    def iter(self, *tags):
        """ Depth-first walk over descendant elements with one of tags.
        """
        for child in self.elements:
            if not tags or child.tag in tags:
                yield child
            for element in child.iter(*tags):
                yield element

    def find(self, *tags):
        """ First descendant element with one of tags, or None.
        """
        return next(self.iter(*tags), None)


def from_soup(node):
    """
    Convert a BeautifulSoup node to the generic tree.  Comments, doctypes
    and other markup declarations are dropped; returns None for them.

    """
    if isinstance(node, PreformattedString):
        return None
    if isinstance(node, NavigableString):
        return Text(str(node))
    if isinstance(node, Tag):
        attrs = {}
        for name, value in node.attrs.items():
            # Multi-valued attributes (class, rel, ...) come back as lists.
            attrs[name] = ' '.join(value) if isinstance(value, list) else value
        element = Element(node.name, attrs)
        for child in node.children:
            converted = from_soup(child)
            if converted is not None:
                element.append(converted)
        return element
    logger.debug('Skipping unsupported node {0!r}'.format(node))
    return None


def parse_html(html):
    """
    Parse an HTML fragment into an Element wrapping the top-level nodes,
    the way a container's innerHTML is exposed.

    """
    soup = BeautifulSoup(html, 'html.parser')
    root = Element('div')
    for child in soup.children:
        converted = from_soup(child)
        if converted is not None:
            root.append(converted)
    return root
