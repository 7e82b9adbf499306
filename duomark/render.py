"""
HTML renderer for block tokens, and the render_markdown entry point.
"""

import re
import logging

from .common import Dumper
from .blocks import BlockParser
from .escapes import escape_html
from .inlines import InlineParser
from .state import ParseState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class HtmlRenderer(Dumper):

    def __init__(self, state=None, sanitize=True):
        super(HtmlRenderer, self).__init__()
        self.state = state if state is not None else ParseState()
        self.sanitize = sanitize
        self.blocksep = '\n'
        self.inline_parser = InlineParser(self.state, sanitize)

    @staticmethod
    def in_tags(tag, attrs, contents, selfclosing=False):
        result = '<' + tag
        if attrs:
            for attr in attrs:
                result += ' {0}="{1}"'.format(attr[0], attr[1])

        if contents:
            result += '>{0}</{1}>'.format(contents, tag)
        elif selfclosing:
            result += ' />'
        else:
            result += '></{0}>'.format(tag)
        return result

    def render_inline(self, text):
        return self.inline_parser.parse(text)

    @staticmethod
    def align_attrs(alignment):
        if not alignment:
            return []
        return [['style', 'text-align: {0}'.format(alignment)]]

    def render_list_items(self, items):
        result = []
        for item in items:
            contents = self.render_inline(item.content)
            if item.children:
                contents += self.render_blocks(item.children)
            result.append(self.in_tags('li', [], contents))
        return ''.join(result)

    def render_task_list(self, token):
        result = []
        for item in token.items:
            checkbox = '<input type="checkbox" checked disabled />' if item.checked else \
                '<input type="checkbox" disabled />'
            result.append(self.in_tags(
                'li', [['class', 'task-list-item']],
                checkbox + ' ' + self.render_inline(item.content),
            ))
        return self.in_tags('ul', [['class', 'task-list']], ''.join(result))

    def render_table(self, token):
        def alignment(idx):
            return token.alignments[idx] if idx < len(token.alignments) else None

        header = ''.join(
            self.in_tags('th', self.align_attrs(alignment(idx)), self.render_inline(cell))
            for idx, cell in enumerate(token.headers)
        )
        body = ''.join(
            self.in_tags('tr', [], ''.join(
                self.in_tags('td', self.align_attrs(alignment(idx)), self.render_inline(cell))
                for idx, cell in enumerate(row)
            ))
            for row in token.rows
        )
        return '<table><thead><tr>{0}</tr></thead><tbody>{1}</tbody></table>'.format(header, body)

    def render_definition_list(self, token):
        result = []
        for item in token.items:
            result.append(self.in_tags('dt', [], self.render_inline(item.term)))
            for definition in item.definitions:
                result.append(self.in_tags('dd', [], self.render_inline(definition)))
        return self.in_tags('dl', [], ''.join(result))

    def render_block(self, token):
        """ Render a single block token.
        """
        if token.t == 'heading':
            tag = 'h{0}'.format(token.level)
            return self.in_tags(tag, [], self.render_inline(token.content))

        elif token.t == 'paragraph':
            contents = self.render_inline(token.content)
            return self.in_tags('p', [], re.sub(r'(<br />)?\n', '<br />', contents))

        elif token.t == 'code_block':
            # Code is escaped whatever the sanitize setting.
            attrs = [['class', 'language-' + escape_html(token.language)]] if token.language else []
            return self.in_tags('pre', [], self.in_tags('code', attrs, escape_html(token.content)))

        elif token.t == 'blockquote':
            inner = BlockParser(self.state).parse(token.content)
            return '<blockquote>{0}</blockquote>'.format(self.render_blocks(inner))

        elif token.t == 'ul':
            return self.in_tags('ul', [], self.render_list_items(token.items))

        elif token.t == 'ol':
            attrs = [] if token.start == 1 else [['start', token.start]]
            return self.in_tags('ol', attrs, self.render_list_items(token.items))

        elif token.t == 'task_list':
            return self.render_task_list(token)

        elif token.t == 'table':
            return self.render_table(token)

        elif token.t == 'dl':
            return self.render_definition_list(token)

        elif token.t == 'hr':
            return self.in_tags('hr', [], '', True)

        else:
            logger.warning('Unknown block type: {0}'.format(token.t))
            return ''

    def render_blocks(self, tokens):
        """ Render a list of block tokens, separated by self.blocksep.
        """
        return self.blocksep.join(self.render_block(token) for token in tokens)

    def render_footnotes(self):
        """
        Render the footnote section, numbered in definition order, each
        entry linking back to its citation.

        """
        entries = []
        for fn_id, footnote in self.state.footnotes_in_order():
            entries.append('<li id="fn-{0}" class="footnote-item">{1} '
                           '<a href="#fnref-{0}" class="footnote-backref">↩</a></li>'.format(
                               fn_id, self.render_inline(footnote.content)))
        return '<section class="footnotes"><hr /><ol class="footnote-list">{0}</ol></section>'.format(
            ''.join(entries))


def render_tokens(tokens, state=None, sanitize=True):
    return HtmlRenderer(state, sanitize).render_blocks(tokens)


def render_footnotes(state, sanitize=True):
    return HtmlRenderer(state, sanitize).render_footnotes()


def render_markdown(markdown, sanitize=True, preserve_state=False, state=None):
    """
    Convert a markdown document to HTML.

    Unless preserve_state is set the parse state starts empty, and the
    footnote section is appended when the document defines footnotes.
    preserve_state is meant for nested renders that must see the link
    references and footnotes of the enclosing document; pass that
    document's state along.

    """
    if not markdown:
        return ''

    if state is None:
        state = ParseState()
    elif not preserve_state:
        state.reset()

    tokens = BlockParser(state).parse(markdown)
    renderer = HtmlRenderer(state, sanitize)
    html = renderer.render_blocks(tokens)

    if not preserve_state and state.footnotes:
        html += renderer.render_footnotes()

    return html
