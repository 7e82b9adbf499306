
import pytest

from duomark import ParseState, parse_inline
from duomark.escapes import ESCAPABLE, apply_escapes, escape_html, revert_escapes


def test_emphasis_precedence():
    assert parse_inline('***a*** **b** *c*') == \
        '<strong><em>a</em></strong> <strong>b</strong> <em>c</em>'


def test_underscore_emphasis():
    assert parse_inline('___a___ __b__') == '<strong><em>a</em></strong> <strong>b</strong>'


def test_underscore_inside_words_is_literal():
    assert parse_inline('a_b_c and _em_') == 'a_b_c and <em>em</em>'


def test_strikethrough_before_subscript():
    assert parse_inline('~~a~~ ~b~') == '<del>a</del> <sub>b</sub>'


def test_superscript_and_highlight():
    assert parse_inline('x^2^ ==key==') == 'x<sup>2</sup> <mark>key</mark>'


def test_code_span():
    assert parse_inline('run `ls`') == 'run <code>ls</code>'


def test_hard_break():
    assert parse_inline('a  \nb') == 'a<br />\nb'


def test_inline_link_and_image():
    assert parse_inline('[a](http://x.com) ![b](y.png)') == \
        '<a href="http://x.com">a</a> <img src="y.png" alt="b" />'


def test_sanitize_escapes_html():
    assert parse_inline('<b>"x"</b> & \'y\'') == \
        '&lt;b&gt;&quot;x&quot;&lt;/b&gt; &amp; &#039;y&#039;'


def test_sanitize_off_keeps_html():
    assert parse_inline('<b>x</b> **y**', sanitize=False) == '<b>x</b> <strong>y</strong>'


@pytest.mark.parametrize('char', ESCAPABLE)
def test_backslash_escapes(char):
    expected = '&gt;' if char == '>' else char
    assert parse_inline('\\' + char) == expected


def test_escaped_markers_stay_literal():
    assert parse_inline('\\*a\\* \\[b\\]') == '*a* [b]'


def test_escape_codec():
    escaped = apply_escapes('\\*\\_')
    assert '*' not in escaped
    assert '_' not in escaped
    assert revert_escapes(escaped) == '*_'


def test_escape_html_is_applied_once():
    assert escape_html('&lt;') == '&amp;lt;'


def test_reference_links_are_case_insensitive():
    state = ParseState()
    state.set_link_ref('Home', '/')
    assert parse_inline('[HOME] [x][home] [Home][]', state) == \
        '<a href="/">HOME</a> <a href="/">x</a> <a href="/">Home</a>'


def test_reference_link_title():
    state = ParseState()
    state.set_link_ref('d', 'http://d', 'Say "hi"')
    assert parse_inline('[d]', state) == \
        '<a href="http://d" title="Say &quot;hi&quot;">d</a>'


def test_unknown_references_are_left_alone():
    assert parse_inline('[a][b] [c][] [d] [^e]') == '[a][b] [c][] [d] [^e]'


def test_footnote_reference():
    state = ParseState()
    state.set_footnote('first', 'One')
    state.set_footnote('second', 'Two')
    assert parse_inline('x[^second]', state) == \
        'x<sup class="footnote-ref"><a href="#fn-second" id="fnref-second">[2]</a></sup>'


def test_autolinks():
    assert parse_inline('<http://a.com> <me@a.com>') == \
        '<a href="http://a.com">http://a.com</a> <a href="mailto:me@a.com">me@a.com</a>'


def test_empty_text():
    assert parse_inline('') == ''


def test_adjacent_underscore_emphasis():
    assert parse_inline('_a_ _b_') == '<em>a</em> <em>b</em>'
    assert parse_inline('(_a_)') == '(<em>a</em>)'
