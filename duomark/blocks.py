"""
Block level tokenizer.

The document is split into lines, link reference and footnote definitions
are pulled out, then the remaining lines are consumed by one sub-parser
per construct.  Every sub-parser takes the line list and a cursor and
returns a ParseResult (token, end_index) or None when it declines.

"""

import re
import logging

from .common import (
    Dumper, get_indent, is_blank, parse_pipe_row, is_block_starter, is_list_start,
    reBulletItem, reOrderedItem, reBulletStart, reTaskItem, reTaskStart,
    reHrule, reTableSeparator,
)
from .state import ParseState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


reFootnoteDef = re.compile(r'^\s*\[\^([^\]]+)\]:\s+(.+)$')
reLinkRefDef = re.compile(r'^\s*\[([^\]]+)\]:\s+<?([^>\s]+)>?(?:\s+["\']([^"\']+)["\'])?\s*$')
reAtxHeading = re.compile(r'^(#{1,6})\s+(.+)$')
reIndentedCode = re.compile(r'^( {4}|\t)')


class Token(Dumper):
    """
    A block token.  ``t`` names the kind (heading, code_block, blockquote,
    ul, ol, task_list, table, dl, hr, paragraph), the remaining attributes
    depend on it.

    """

    def __init__(self, t=None, **kwargs):
        super(Token, self).__init__()
        self.t = t
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __eq__(self, other):
        return isinstance(other, Token) and self.__dict__ == other.__dict__


class ListItem(Dumper):

    def __init__(self, content, children=None):
        super(ListItem, self).__init__()
        self.content = content
        self.children = children

    def __eq__(self, other):
        return isinstance(other, ListItem) and self.__dict__ == other.__dict__


class TaskItem(Dumper):

    def __init__(self, checked, content):
        super(TaskItem, self).__init__()
        self.checked = checked
        self.content = content

    def __eq__(self, other):
        return isinstance(other, TaskItem) and self.__dict__ == other.__dict__


class DefinitionItem(Dumper):

    def __init__(self, term, definitions=None):
        super(DefinitionItem, self).__init__()
        self.term = term
        self.definitions = definitions if definitions is not None else []

    def __eq__(self, other):
        return isinstance(other, DefinitionItem) and self.__dict__ == other.__dict__


class ParseResult(Dumper):
    """
    What a sub-parser consumed: the token and the index of the first line
    after it.  The list parser may produce several sibling tokens, those
    are all in ``tokens``.

    """

    def __init__(self, token, end_index, tokens=None):
        super(ParseResult, self).__init__()
        self.token = token
        self.end_index = end_index
        self.tokens = tokens if tokens is not None else [token]


def split_lines(text):
    return re.split(r'\r\n|\n|\r', text)


def extract_definitions(raw_lines, state):
    """
    First pass: register footnote and link reference definitions in state
    and return the other lines, in order.

    """
    lines = []
    for line in raw_lines:
        match = reFootnoteDef.match(line)
        if match:
            state.set_footnote(match.group(1), match.group(2))
            continue

        match = reLinkRefDef.match(line)
        if match:
            state.set_link_ref(match.group(1), match.group(2), match.group(3))
        else:
            lines.append(line)
    return lines


def parse_fenced_code_block(lines, index):
    """
    Parse a ``` fenced block.  An unclosed fence runs to the end of the
    input.

    """
    first = lines[index].strip()
    if not first.startswith('```'):
        return None

    language = first[3:].strip()
    content_lines = []
    i = index + 1
    while i < len(lines) and not lines[i].strip().startswith('```'):
        content_lines.append(lines[i])
        i += 1

    # Skip the closing fence.
    if i < len(lines):
        i += 1

    return ParseResult(Token('code_block', language=language, content='\n'.join(content_lines)), i)


def parse_indented_code_block(lines, index):
    """ Parse lines indented by four spaces or a tab.
    """
    if not reIndentedCode.match(lines[index]):
        return None

    content_lines = []
    i = index
    while i < len(lines):
        line = lines[i]
        if reIndentedCode.match(line):
            content_lines.append(reIndentedCode.sub('', line, count=1))
        elif not line.strip():
            content_lines.append('')
        else:
            break
        i += 1

    while content_lines and content_lines[-1] == '':
        content_lines.pop()

    if not content_lines:
        return None

    return ParseResult(Token('code_block', language='', content='\n'.join(content_lines)), i)


def parse_atx_heading(lines, index):
    match = reAtxHeading.match(lines[index])
    if not match:
        return None
    return ParseResult(Token('heading', level=len(match.group(1)), content=match.group(2)), index + 1)


def parse_setext_heading(lines, index):
    """
    Parse a line underlined with === (level 1) or --- (level 2).  A list
    item followed by --- is left to the list parser.

    """
    if index + 1 >= len(lines):
        return None

    text = lines[index].strip()
    underline = lines[index + 1].strip()
    if not text:
        return None

    if re.match(r'^=+$', underline):
        return ParseResult(Token('heading', level=1, content=text), index + 2)

    if re.match(r'^-+$', underline) and not reBulletStart.match(text):
        return ParseResult(Token('heading', level=2, content=text), index + 2)

    return None


def parse_horizontal_rule(lines, index):
    if not reHrule.match(lines[index].strip()):
        return None
    return ParseResult(Token('hr'), index + 1)


def parse_blockquote(lines, index):
    """
    Collect consecutive '>' lines.  The inner content is kept raw; it gets
    tokenized when the blockquote is rendered.

    """
    if not lines[index].strip().startswith('>'):
        return None

    quote_lines = []
    i = index
    while i < len(lines) and lines[i].strip().startswith('>'):
        quote_lines.append(re.sub(r'^>\s?', '', lines[i].strip(), count=1))
        i += 1

    return ParseResult(Token('blockquote', content='\n'.join(quote_lines)), i)


def parse_task_list(lines, index):
    if not reTaskItem.match(lines[index].strip()):
        return None

    items = []
    i = index
    while i < len(lines):
        line = lines[i].strip()
        match = reTaskItem.match(line)
        if match:
            items.append(TaskItem(match.group(1).lower() == 'x', match.group(2)))
            i += 1
        elif not line:
            i += 1
            following = next((l for l in lines[i:] if l.strip()), None)
            if following is None or not reTaskStart.match(following.strip()):
                break
        else:
            break

    return ParseResult(Token('task_list', items=items), i)


def detect_list_item(s):
    """
    Return (list type, content, start number) for a trimmed list item
    line, or None.

    """
    match = reBulletItem.match(s)
    if match:
        return 'ul', match.group(1), None
    match = reOrderedItem.match(s)
    if match:
        return 'ol', match.group(2), int(match.group(1))
    return None


def parse_list(lines, start_index, base_indent):
    """
    Parse the lists found at base_indent, starting at start_index.

    Items more indented than base_indent are parsed recursively, at
    base_indent + 2, as children of the preceding item.  A change of
    marker type closes the current list and opens a new one, so several
    tokens may come back.  Returns (tokens, end_index).

    """
    tokens = []
    i = start_index

    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()
        indent = get_indent(line)

        if not trimmed:
            i += 1
            continue

        if indent < base_indent:
            break

        first = detect_list_item(trimmed)
        if not first or indent != base_indent:
            break

        list_type, _, start = first
        items = []

        while i < len(lines):
            item_line = lines[i]
            item_trimmed = item_line.strip()
            item_indent = get_indent(item_line)

            if not item_trimmed:
                i += 1
                continue

            if item_indent != base_indent:
                break

            current = detect_list_item(item_trimmed)
            if not current or current[0] != list_type:
                break

            i += 1
            children, i = parse_list(lines, i, base_indent + 2)
            items.append(ListItem(current[1], children or None))

        if list_type == 'ul':
            tokens.append(Token('ul', items=items))
        else:
            tokens.append(Token('ol', items=items, start=start))

    return tokens, i


def parse_lists(lines, index):
    """ Entry point of the list parser for the tokenizer loop.
    """
    line = lines[index]
    if not is_list_start(line.strip()):
        return None
    tokens, end_index = parse_list(lines, index, get_indent(line))
    if not tokens:
        return None
    return ParseResult(tokens[0], end_index, tokens)


def table_alignment(cell):
    cell = cell.strip()
    left = cell.startswith(':')
    right = cell.endswith(':')
    if left and right:
        return 'center'
    elif right:
        return 'right'
    elif left:
        return 'left'
    return None


def parse_table(lines, index):
    """
    Parse a pipe table.  The line after the header must be a separator
    row; colons in it give the column alignment.

    """
    header = lines[index].strip()
    if '|' not in header or index + 1 >= len(lines):
        return None

    separator = lines[index + 1].strip()
    if not reTableSeparator.match(separator):
        return None

    headers = parse_pipe_row(header)
    alignments = [table_alignment(cell) for cell in parse_pipe_row(separator)]

    rows = []
    i = index + 2
    while i < len(lines):
        row = lines[i].strip()
        if not row or '|' not in row:
            break
        rows.append(parse_pipe_row(row))
        i += 1

    return ParseResult(Token('table', headers=headers, alignments=alignments, rows=rows), i)


def is_definition(s):
    return s.startswith(': ')


def can_be_term(s):
    return bool(s) and not s.startswith(':') and not re.match(r'^[-*+#>\d]', s)


def parse_definition_list(lines, index):
    """
    Parse ``Term`` lines each followed by one or more ``: definition``
    lines.  A blank line ends the list unless another term/definition
    pair comes right after it.

    """
    if not can_be_term(lines[index].strip()) or index + 1 >= len(lines):
        return None
    if not is_definition(lines[index + 1].strip()):
        return None

    items = []
    i = index
    while i < len(lines):
        line = lines[i].strip()

        if not line:
            i += 1
            if (i + 1 < len(lines) and lines[i].strip() and
                    not lines[i].strip().startswith(':') and
                    is_definition(lines[i + 1].strip())):
                continue
            break

        if is_definition(line):
            if items:
                items[-1].definitions.append(line[2:])
            i += 1
            continue

        if not line.startswith(':') and i + 1 < len(lines) and is_definition(lines[i + 1].strip()):
            items.append(DefinitionItem(line))
            i += 1
            continue

        break

    if not any(item.definitions for item in items):
        return None

    return ParseResult(Token('dl', items=items), i)


def parse_paragraph(lines, index):
    """
    Collect consecutive non-blank lines up to a blank line or a line that
    starts another block.  The first line is always taken: every more
    specific parser has already declined it.

    """
    paragraph_lines = []
    i = index
    while i < len(lines):
        line = lines[i]
        trimmed = line.strip()
        if not trimmed:
            i += 1
            break
        if paragraph_lines and is_block_starter(trimmed):
            break
        paragraph_lines.append(line)
        i += 1

    if not paragraph_lines:
        return None

    return ParseResult(Token('paragraph', content='\n'.join(paragraph_lines)), i)


class BlockParser(Dumper):

    def __init__(self, state=None):
        super(BlockParser, self).__init__()
        self.state = state if state is not None else ParseState()

    def parse(self, text):
        """
        Tokenize a markdown document into a list of block tokens.  The
        definitions found are added to self.state, which is not reset.

        """
        lines = extract_definitions(split_lines(text), self.state)
        tokens = []
        i = 0

        while i < len(lines):
            line = lines[i]
            if is_blank(line):
                i += 1
                continue

            result = self.parse_block(lines, i)
            if result:
                tokens.extend(result.tokens)
                i = result.end_index
            else:
                logger.warning('Line {0} ({1!r}) did not match any block.'.format(i + 1, line))
                i += 1

        return tokens

    def parse_block(self, lines, i):
        """ Try the sub-parsers in priority order.
        """
        for parser in BLOCK_PARSERS:
            result = parser(lines, i)
            if result:
                return result
        return None


BLOCK_PARSERS = (
    parse_fenced_code_block,
    parse_atx_heading,
    parse_setext_heading,
    parse_horizontal_rule,
    parse_blockquote,
    parse_task_list,
    parse_lists,
    parse_indented_code_block,
    parse_table,
    parse_definition_list,
    parse_paragraph,
)


def tokenize_blocks(markdown, state=None):
    """ Tokenize markdown with the given (or a fresh) parse state.
    """
    return BlockParser(state).parse(markdown)
