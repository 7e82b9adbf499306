"""
Inline markup parser.

Inline markup is turned into HTML by a fixed sequence of substitutions.
Each pass relies on the text left by the passes before it, so the order
of INLINE_PASSES matters: bold+italic before bold before italic,
strikethrough and superscript before subscript.

"""

import re
import logging

from .common import Dumper
from .escapes import apply_escapes, revert_escapes, escape_html
from .state import ParseState

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


reHardBreak = re.compile(r' {2,}\n')
reUrlAutolink = re.compile(r'&lt;(https?://[^&]+)&gt;')
reEmailAutolink = re.compile(r'&lt;([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})&gt;')
reFootnoteRef = re.compile(r'\[\^([^\]]+)\]')
reImage = re.compile(r'!\[([^\]]*)\]\(([^)]+)\)')
reLink = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
reFullReference = re.compile(r'\[([^\]]+)\]\[([^\]]+)\]')
reCollapsedReference = re.compile(r'\[([^\]]+)\]\[\]')
reShortcutReference = re.compile(r'\[([^\]]+)\](?!\(|\[)')
reCode = re.compile(r'`([^`]+)`')
reStrikethrough = re.compile(r'~~([^~]+)~~')
reHighlight = re.compile(r'==([^=]+)==')
reSuperscript = re.compile(r'\^([^\^]+)\^')
reSubscript = re.compile(r'(?<!~)~([^~]+)~(?!~)')
reStrongEmphStar = re.compile(r'\*\*\*([^*]+)\*\*\*')
reStrongEmphUnderscore = re.compile(r'___([^_]+)___')
reStrongStar = re.compile(r'\*\*([^*]+)\*\*')
reStrongUnderscore = re.compile(r'__([^_]+)__')
reEmphStar = re.compile(r'\*([^*]+)\*')
# Underscores only count outside words, snake_case identifiers stay intact.
reEmphUnderscore = re.compile(r'(?<![a-zA-Z0-9])_([^_]+)_(?![a-zA-Z0-9])')


class InlineParser(Dumper):

    def __init__(self, state=None, sanitize=True):
        super(InlineParser, self).__init__()
        self.state = state if state is not None else ParseState()
        self.sanitize = sanitize

    def link_html(self, ref, text):
        title = ' title="{0}"'.format(escape_html(ref.title)) if ref.title else ''
        return '<a href="{0}"{1}>{2}</a>'.format(ref.url, title, text)

    def parse_footnote_ref(self, match):
        """
        Replace a [^id] citation by a numbered link to its footnote, or
        leave it alone when id was never defined.

        """
        fn_id = match.group(1)
        footnote = self.state.footnotes.get(fn_id)
        if footnote is None:
            logger.debug('Unknown footnote [^%s]', fn_id)
            return match.group(0)
        return '<sup class="footnote-ref"><a href="#fn-{0}" id="fnref-{0}">[{1}]</a></sup>'.format(
            fn_id, footnote.index)

    def parse_full_reference(self, match):
        ref = self.state.get_link_ref(match.group(2))
        if ref is None:
            logger.debug('Unknown link reference [%s]', match.group(2))
            return match.group(0)
        return self.link_html(ref, match.group(1))

    def parse_collapsed_reference(self, match):
        ref = self.state.get_link_ref(match.group(1))
        if ref is None:
            return match.group(0)
        return self.link_html(ref, match.group(1))

    # A shortcut reference resolves exactly like a collapsed one.
    parse_shortcut_reference = parse_collapsed_reference

    def parse(self, text):
        """ Render the inline markup of text as HTML.
        """
        if not text:
            return ''

        result = escape_html(text) if self.sanitize else text
        result = apply_escapes(result)

        for regex, repl in INLINE_PASSES:
            if isinstance(repl, str):
                result = regex.sub(repl, result)
            else:
                result = regex.sub(lambda m, repl=repl: repl(self, m), result)

        return revert_escapes(result)


INLINE_PASSES = (
    (reHardBreak, '<br />\n'),
    (reUrlAutolink, r'<a href="\1">\1</a>'),
    (reEmailAutolink, r'<a href="mailto:\1">\1</a>'),
    (reFootnoteRef, InlineParser.parse_footnote_ref),
    (reImage, r'<img src="\2" alt="\1" />'),
    (reLink, r'<a href="\2">\1</a>'),
    (reFullReference, InlineParser.parse_full_reference),
    (reCollapsedReference, InlineParser.parse_collapsed_reference),
    (reShortcutReference, InlineParser.parse_shortcut_reference),
    (reCode, r'<code>\1</code>'),
    (reStrikethrough, r'<del>\1</del>'),
    (reHighlight, r'<mark>\1</mark>'),
    (reSuperscript, r'<sup>\1</sup>'),
    (reSubscript, r'<sub>\1</sub>'),
    (reStrongEmphStar, r'<strong><em>\1</em></strong>'),
    (reStrongEmphUnderscore, r'<strong><em>\1</em></strong>'),
    (reStrongStar, r'<strong>\1</strong>'),
    (reStrongUnderscore, r'<strong>\1</strong>'),
    (reEmphStar, r'<em>\1</em>'),
    (reEmphUnderscore, r'<em>\1</em>'),
)


def parse_inline(text, state=None, sanitize=True):
    return InlineParser(state, sanitize).parse(text)
