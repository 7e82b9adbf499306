"""
Single-line markdown pattern detection.

An editor calls these on the line being typed to decide whether it should
turn into a heading, list, blockquote, code block or rule.  They keep no
state and each returns a dict describing the match, or None.

"""

import re

reHeadingPattern = re.compile(r'^(#{1,6})\s+(\S.*)$')
reUnorderedPattern = re.compile(r'^[-*+]\s+(.*)$')
reOrderedPattern = re.compile(r'^\d+\.\s+(.*)$')
reBlockquotePattern = re.compile(r'^>\s?(.*)$')
# A bare ``` is not a trigger: the user may still be typing the language.
reCodeFencePattern = re.compile(r'^```(\w+)$')
reRulePattern = re.compile(r'^([-*_]\s*){3,}$')
reRuleChars = re.compile(r'^[-*_\s]+$')


def detect_heading_pattern(line):
    """
    Match '# Title' up to '###### Title'.  Some content is required, so
    '# ' alone does not convert while the marker is being typed.

    """
    match = reHeadingPattern.match(line)
    if not match:
        return None
    return {'level': len(match.group(1)), 'content': match.group(2)}


def detect_list_pattern(line):
    match = reUnorderedPattern.match(line)
    if match:
        return {'type': 'unordered', 'content': match.group(1)}

    match = reOrderedPattern.match(line)
    if match:
        return {'type': 'ordered', 'content': match.group(1)}

    return None


def detect_blockquote_pattern(line):
    match = reBlockquotePattern.match(line)
    if not match:
        return None
    return {'content': match.group(1)}


def detect_code_fence_start(line):
    """ Match ```lang, the whole line being the fence and a word.
    """
    match = reCodeFencePattern.match(line)
    if not match:
        return None
    return {'language': match.group(1)}


def is_horizontal_rule(line):
    trimmed = line.strip()
    return bool(reRulePattern.match(trimmed) and reRuleChars.match(trimmed))


def detect_line_pattern(line):
    """
    Detect which block the line starts.  Rules are checked first since
    '- - -' or '***' would otherwise pass for list items.

    """
    if is_horizontal_rule(line):
        return {'type': 'hr'}

    heading = detect_heading_pattern(line)
    if heading:
        return {'type': 'heading', 'level': heading['level']}

    list_pattern = detect_list_pattern(line)
    if list_pattern:
        if list_pattern['type'] == 'unordered':
            return {'type': 'unordered-list'}
        return {'type': 'ordered-list'}

    if detect_blockquote_pattern(line):
        return {'type': 'blockquote'}

    fence = detect_code_fence_start(line)
    if fence:
        return {'type': 'code-block', 'language': fence['language']}

    return None
