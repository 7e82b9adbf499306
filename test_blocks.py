
import pytest

from duomark import ParseState, Token, ListItem, tokenize_blocks
from duomark.blocks import (
    DefinitionItem, TaskItem, extract_definitions, parse_indented_code_block,
    parse_setext_heading, split_lines,
)


@pytest.mark.parametrize('level', range(1, 7))
def test_atx_heading_levels(level):
    tokens = tokenize_blocks('#' * level + ' Title')
    assert tokens == [Token('heading', level=level, content='Title')]


def test_seven_hashes_is_a_paragraph():
    assert tokenize_blocks('####### Title') == [Token('paragraph', content='####### Title')]


def test_setext_headings():
    assert tokenize_blocks('One\n===\n\nTwo\n---') == [
        Token('heading', level=1, content='One'),
        Token('heading', level=2, content='Two'),
    ]


def test_list_item_over_dashes_is_not_a_heading():
    assert parse_setext_heading(['- item', '---'], 0) is None
    assert tokenize_blocks('- item\n---') == [
        Token('ul', items=[ListItem('item')]),
        Token('hr'),
    ]


def test_split_lines_handles_all_line_endings():
    assert split_lines('a\r\nb\rc\nd') == ['a', 'b', 'c', 'd']


def test_crlf_paragraph():
    assert tokenize_blocks('a\r\nb') == [Token('paragraph', content='a\nb')]


def test_extract_definitions():
    state = ParseState()
    lines = extract_definitions([
        'text',
        '[Home]: http://example.com "Start page"',
        '[^note]: A note',
        '[^other]: Another',
        'more',
    ], state)

    assert lines == ['text', 'more']
    assert state.get_link_ref('home').url == 'http://example.com'
    assert state.get_link_ref('HOME').title == 'Start page'
    assert state.footnotes['note'].index == 1
    assert state.footnotes['other'].index == 2
    assert state.footnotes['other'].content == 'Another'


def test_link_reference_with_angle_brackets_and_no_title():
    state = ParseState()
    tokenize_blocks('[x]: <http://example.com>', state)
    ref = state.get_link_ref('x')
    assert ref.url == 'http://example.com'
    assert ref.title is None


def test_fenced_code_block():
    assert tokenize_blocks('```py\nprint(1)\n\nprint(2)\n```\nafter') == [
        Token('code_block', language='py', content='print(1)\n\nprint(2)'),
        Token('paragraph', content='after'),
    ]


def test_unclosed_fence_runs_to_the_end():
    assert tokenize_blocks('```\na\nb') == [Token('code_block', language='', content='a\nb')]


def test_indented_code_drops_trailing_blank_lines():
    assert tokenize_blocks('    code\n\n\nnext') == [
        Token('code_block', language='', content='code'),
        Token('paragraph', content='next'),
    ]


def test_indented_code_without_content_is_declined():
    assert parse_indented_code_block(['    ', ''], 0) is None


def test_horizontal_rules():
    for rule in ('---', '***', '___', '- - -', '* * *', '_ _ _ _'):
        assert tokenize_blocks(rule) == [Token('hr')], rule


def test_blockquote_keeps_raw_content():
    assert tokenize_blocks('> # Title\n>more\nafter') == [
        Token('blockquote', content='# Title\nmore'),
        Token('paragraph', content='after'),
    ]


def test_task_list_across_blank_line():
    assert tokenize_blocks('- [ ] a\n\n- [X] b') == [
        Token('task_list', items=[TaskItem(False, 'a'), TaskItem(True, 'b')]),
    ]


def test_task_list_stops_before_plain_item():
    assert tokenize_blocks('- [ ] a\n\n- b') == [
        Token('task_list', items=[TaskItem(False, 'a')]),
        Token('ul', items=[ListItem('b')]),
    ]


def test_nested_lists_three_levels():
    tokens = tokenize_blocks('- one\n  - two\n    - three\n- four')
    three = Token('ul', items=[ListItem('three')])
    two = Token('ul', items=[ListItem('two', [three])])
    assert tokens == [Token('ul', items=[ListItem('one', [two]), ListItem('four')])]


def test_ordered_list_keeps_start_number():
    assert tokenize_blocks('5. a\n6. b') == [
        Token('ol', items=[ListItem('a'), ListItem('b')], start=5),
    ]


def test_marker_change_starts_a_new_list():
    assert tokenize_blocks('- a\n1. b') == [
        Token('ul', items=[ListItem('a')]),
        Token('ol', items=[ListItem('b')], start=1),
    ]


def test_nested_ordered_list_in_bullets():
    tokens = tokenize_blocks('- a\n  1. b\n  2. c')
    nested = Token('ol', items=[ListItem('b'), ListItem('c')], start=1)
    assert tokens == [Token('ul', items=[ListItem('a', [nested])])]


def test_table_alignments():
    tokens = tokenize_blocks('| a | b | c | d |\n|---|:---|:---:|---:|\n| 1 | 2 | 3 | 4 |')
    assert tokens == [Token(
        'table',
        headers=['a', 'b', 'c', 'd'],
        alignments=[None, 'left', 'center', 'right'],
        rows=[['1', '2', '3', '4']],
    )]


def test_table_needs_separator_row():
    assert tokenize_blocks('a | b\nc | d') == [Token('paragraph', content='a | b\nc | d')]


def test_definition_list_continues_after_blank_line():
    assert tokenize_blocks('A\n: one\n\nB\n: two\n: three') == [
        Token('dl', items=[
            DefinitionItem('A', ['one']),
            DefinitionItem('B', ['two', 'three']),
        ]),
    ]


def test_paragraph_stops_at_block_starter():
    assert tokenize_blocks('text\n# head\nmore\n> quote') == [
        Token('paragraph', content='text'),
        Token('heading', level=1, content='head'),
        Token('paragraph', content='more'),
        Token('blockquote', content='quote'),
    ]


def test_hashtag_line_is_kept_as_paragraph():
    assert tokenize_blocks('#hashtag') == [Token('paragraph', content='#hashtag')]


def test_only_definitions_gives_no_tokens():
    state = ParseState()
    assert tokenize_blocks('[a]: http://a\n[^n]: note\n\n', state) == []
    assert state.get_link_ref('a').url == 'http://a'
