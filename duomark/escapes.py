"""
Backslash escape codec and HTML escaping.

Escaped punctuation is swapped for code points of the Private Use Area
before the inline regexes run, and swapped back once they are done.

"""

import re

# Ordered: '\&gt;' is how an escaped '>' looks once the text went
# through escape_html.
ESCAPE_MAP = [
    ('\\*', '\ue000'),
    ('\\_', '\ue001'),
    ('\\~', '\ue002'),
    ('\\`', '\ue003'),
    ('\\[', '\ue004'),
    ('\\]', '\ue005'),
    ('\\#', '\ue006'),
    ('\\&gt;', '\ue007'),
    ('\\>', '\ue007'),
    ('\\-', '\ue008'),
    ('\\+', '\ue009'),
    ('\\.', '\ue00a'),
    ('\\!', '\ue00b'),
    ('\\=', '\ue00c'),
    ('\\^', '\ue00d'),
]

UNESCAPE_MAP = {
    '\ue000': '*',
    '\ue001': '_',
    '\ue002': '~',
    '\ue003': '`',
    '\ue004': '[',
    '\ue005': ']',
    '\ue006': '#',
    '\ue007': '&gt;',
    '\ue008': '-',
    '\ue009': '+',
    '\ue00a': '.',
    '\ue00b': '!',
    '\ue00c': '=',
    '\ue00d': '^',
}

ESCAPABLE = '*_~`[]#>-+.!=^'

rePlaceholder = re.compile('[\ue000-\ue00d]')


def apply_escapes(text):
    """ Replace backslash escapes with their placeholders.
    """
    for pattern, placeholder in ESCAPE_MAP:
        text = text.replace(pattern, placeholder)
    return text


def revert_escapes(text):
    """ Replace placeholders with the literal characters they stand for.
    """
    return rePlaceholder.sub(lambda m: UNESCAPE_MAP[m.group(0)], text)


def escape_html(s):
    """ Escape text for safe embedding in HTML content and attributes.
    """
    s = re.sub(r'[&]', '&amp;', s)
    s = re.sub(r'[<]', '&lt;', s)
    s = re.sub(r'[>]', '&gt;', s)
    s = re.sub(r'["]', '&quot;', s)
    s = re.sub(r"[']", '&#039;', s)
    return s
