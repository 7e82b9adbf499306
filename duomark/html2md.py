"""
HTML to markdown converter.

Walks a generic element/text tree (see htmltree) and writes the markdown
source back.  Block mode (process_node) separates blocks with blank
lines; inline mode (process_inline_content) is used inside paragraphs,
links, emphasis, list items and table cells.

"""

import re
import logging

from .common import Dumper, ParseError, ZERO_WIDTH_SPACE
from .htmltree import Element, Node, Text, parse_html

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


reMarkdownSpecial = re.compile(r'([\\`*_{}\[\]()#+\-.!])')
reHeadingTag = re.compile(r'^h([1-6])$')
reTextAlign = re.compile(r'text-align\s*:\s*(left|center|right)', re.I)
reTaskMarker = re.compile(r'^(\[[ x]\]) +')

# Formatting elements that are dropped when they have no content.
FORMATTING_TAGS = ('strong', 'b', 'em', 'i', 'code', 'del', 's', 'mark', 'sup', 'sub', 'u')

BLOCK_TAGS = ('p', 'pre', 'blockquote', 'ul', 'ol', 'li', 'hr', 'table', 'dl', 'div', 'section')

WRAPPERS = {
    'strong': ('**', '**'),
    'b': ('**', '**'),
    'em': ('*', '*'),
    'i': ('*', '*'),
    'del': ('~~', '~~'),
    's': ('~~', '~~'),
    'mark': ('==', '=='),
    'sup': ('^', '^'),
    'sub': ('~', '~'),
    # No markdown for underline, the tag is kept as is.
    'u': ('<u>', '</u>'),
}


def strip_zero_width_spaces(text):
    """ Remove the caret anchors the editor leaves in its text nodes.
    """
    return text.replace(ZERO_WIDTH_SPACE, '')


def escape_markdown_chars(text):
    """ Backslash-escape characters that have a meaning in markdown.
    """
    return reMarkdownSpecial.sub(r'\\\1', text)


def is_heading_element(element):
    return bool(reHeadingTag.match(element.tag))


def get_heading_level(element):
    """ Heading level 1-6 of an h1..h6 element, 0 for anything else.
    """
    match = reHeadingTag.match(element.tag)
    return int(match.group(1)) if match else 0


def is_block_element(node):
    return isinstance(node, Element) and (node.tag in BLOCK_TAGS or is_heading_element(node))


def is_next_to_block(children, idx):
    """ Returns true if the node at idx has a block element beside it.
    """
    before = children[idx - 1] if idx > 0 else None
    after = children[idx + 1] if idx + 1 < len(children) else None
    return is_block_element(before) or is_block_element(after)


def cell_alignment(cell):
    match = reTextAlign.search(cell.get('style') or '')
    if match:
        return match.group(1).lower()
    return (cell.get('align') or '').lower() or None


def separator_cell(alignment):
    if alignment == 'center':
        return ':---:'
    elif alignment == 'right':
        return '---:'
    return '---'


class MarkdownSerializer(Dumper):

    def convert_heading(self, element):
        """
        Convert an h1..h6 element to an ATX heading.  Headings without text
        are dropped.

        """
        level = get_heading_level(element)
        if level == 0:
            return ''
        if not strip_zero_width_spaces(element.text_content).strip():
            return ''
        content = self.process_inline_content(element).strip()
        return '{0} {1}\n\n'.format('#' * level, content)

    def inline_node(self, node):
        """ Markdown for a single node in inline mode.
        """
        if isinstance(node, Text):
            return strip_zero_width_spaces(node.data)

        tag = node.tag
        content = self.process_inline_content(node)

        if not content and tag in FORMATTING_TAGS:
            return ''

        if tag in WRAPPERS:
            before, after = WRAPPERS[tag]
            return before + content + after
        elif tag == 'code':
            return '`{0}`'.format(strip_zero_width_spaces(node.text_content))
        elif tag == 'a':
            return '[{0}]({1})'.format(content, node.get('href') or '')
        elif tag == 'img':
            return '![{0}]({1})'.format(node.get('alt') or '', node.get('src') or '')
        elif tag == 'br':
            return '  \n'
        elif tag == 'input':
            return self.convert_checkbox(node)
        return content

    def process_inline_content(self, element):
        """ Serialize the children of element without block separators.
        """
        return ''.join(self.inline_node(child) for child in element.children)

    def convert_checkbox(self, element):
        if (element.get('type') or '').lower() != 'checkbox':
            return ''
        return '[x] ' if 'checked' in element.attrs else '[ ] '

    def process_list_items(self, list_element):
        """
        Serialize a ul/ol.  Nested lists are indented by two spaces per
        level.

        """
        ordered = list_element.tag == 'ol'
        start = str(list_element.get('start') or '1')
        index = int(start) if start.isdigit() else 1
        lines = []

        for item in list_element.elements:
            if item.tag != 'li':
                continue

            prefix = '{0}. '.format(index) if ordered else '- '
            text_parts = []
            nested = []
            for child in item.children:
                if isinstance(child, Element) and child.tag in ('ul', 'ol'):
                    nested.append(child)
                else:
                    text_parts.append(self.inline_node(child))

            text = reTaskMarker.sub(r'\1 ', ''.join(text_parts).strip())
            lines.append(prefix + text)

            for sublist in nested:
                for line in self.process_list_items(sublist).split('\n'):
                    if line:
                        lines.append('  ' + line)

            index += 1

        return '\n'.join(lines) + '\n\n'

    def process_table(self, table):
        """
        Serialize a table: header row, a separator row carrying the column
        alignment, then the body rows.

        """
        rows = []
        alignments = []
        header_rows = []

        thead = table.find('thead')
        if thead is not None:
            header_rows = list(thead.iter('tr'))
            if header_rows:
                cells = [cell for cell in header_rows[0].elements if cell.tag in ('th', 'td')]
                rows.append([self.process_inline_content(cell).strip() for cell in cells])
                alignments = [cell_alignment(cell) for cell in cells]

        body = table.find('tbody') or table
        for tr in body.iter('tr'):
            if any(tr is header for header in header_rows):
                continue
            cells = [cell for cell in tr.elements if cell.tag in ('th', 'td')]
            if not cells:
                continue
            if not rows:
                alignments = [cell_alignment(cell) for cell in cells]
            rows.append([self.process_inline_content(cell).strip() for cell in cells])

        if not rows:
            return ''

        lines = ['| {0} |'.format(' | '.join(rows[0])),
                 '| {0} |'.format(' | '.join(separator_cell(a) for a in alignments))]
        for row in rows[1:]:
            lines.append('| {0} |'.format(' | '.join(row)))
        return '\n'.join(lines) + '\n\n'

    def process_definition_list(self, dl):
        lines = []
        for child in dl.elements:
            content = self.process_inline_content(child).strip()
            if child.tag == 'dt':
                lines.append(content)
            elif child.tag == 'dd':
                lines.append(': ' + content)
        return '\n'.join(lines) + '\n\n'

    def process_element(self, element, parent):
        tag = element.tag

        if is_heading_element(element):
            return self.convert_heading(element)

        if tag == 'p':
            return self.process_inline_content(element) + '\n\n'
        elif tag == 'br':
            return '  \n'
        elif tag in WRAPPERS or tag in ('a', 'img', 'input'):
            return self.inline_node(element)
        elif tag == 'code':
            text = strip_zero_width_spaces(element.text_content)
            return text if parent.tag == 'pre' else '`{0}`'.format(text)
        elif tag == 'pre':
            code = element.find('code')
            text = (code if code is not None else element).text_content
            language = ''
            if code is not None:
                for cls in (code.get('class') or '').split():
                    if cls.startswith('language-'):
                        language = cls[len('language-'):]
                        break
            return '```{0}\n{1}\n```\n\n'.format(language, text)
        elif tag == 'blockquote':
            content = self.process_node(element).strip()
            return '\n'.join('> ' + line for line in content.split('\n')) + '\n\n'
        elif tag in ('ul', 'ol'):
            return self.process_list_items(element)
        elif tag == 'li':
            return self.process_inline_content(element)
        elif tag == 'hr':
            return '---\n\n'
        elif tag == 'table':
            return self.process_table(element)
        elif tag == 'dl':
            return self.process_definition_list(element)
        elif tag not in ('div', 'span'):
            logger.debug('Unknown tag <{0}>, serializing its children only'.format(tag))
        return self.process_node(element)

    def process_node(self, node):
        """ Serialize the children of node in block mode.
        """
        parts = []
        children = node.children
        for idx, child in enumerate(children):
            if isinstance(child, Text):
                # Indentation of pretty-printed HTML would read as code.
                if not child.data.strip() and is_next_to_block(children, idx):
                    continue
                parts.append(strip_zero_width_spaces(child.data))
            else:
                parts.append(self.process_element(child, node))
        return ''.join(parts)

    def convert(self, tree):
        markdown = strip_zero_width_spaces(self.process_node(tree))
        return re.sub(r'\n{3,}', '\n\n', markdown).strip()


def convert_heading(element):
    return MarkdownSerializer().convert_heading(element)


def html_to_markdown(tree):
    """
    Convert HTML back to markdown.

    tree is the container element whose children are serialized, or an
    HTML string which is parsed first.

    """
    if isinstance(tree, str):
        tree = parse_html(tree)
    elif isinstance(tree, Text):
        tree = Element('div', children=[Text(tree.data)])
    elif not isinstance(tree, Node):
        raise ParseError('Cannot convert {0!r} to markdown, expected an HTML string or a tree node.'.format(tree))
    return MarkdownSerializer().convert(tree)
