"""
Bidirectional Markdown/HTML conversion.
Copyright (c) 2014 Brendan Abel
License: MIT

"""

from .common import ParseError
from .state import ParseState
from .blocks import BlockParser, Token, ListItem, tokenize_blocks
from .inlines import InlineParser, parse_inline
from .render import HtmlRenderer, render_markdown, render_tokens, render_footnotes
from .htmltree import Element, Text, parse_html
from .html2md import html_to_markdown, escape_markdown_chars
from .linepatterns import (
    detect_line_pattern, detect_heading_pattern, detect_list_pattern,
    detect_blockquote_pattern, detect_code_fence_start, is_horizontal_rule,
)

__version__ = '0.2.0'
