"""
Shared pieces of the markdown engine: the debug base class, the parse
error, line-level regexes and small utility functions.

"""

import re


reBulletItem = re.compile(r'^[-*+]\s+(.*)$')
reOrderedItem = re.compile(r'^(\d+)\.\s+(.*)$')
reBulletStart = re.compile(r'^[-*+]\s+')
reOrderedStart = re.compile(r'^\d+\.\s+')
reTaskItem = re.compile(r'^[-*+]\s+\[([ xX])\]\s+(.*)$')
reTaskStart = re.compile(r'^[-*+]\s+\[([ xX])\]')

# Three or more of the same rule character, spaces allowed in between.
reHrule = re.compile(r'^(?:(?:-\s*){3,}|(?:\*\s*){3,}|(?:_\s*){3,})$')

reTableSeparator = re.compile(r'^\|?[\s:]*-+[\s:]*(\|[\s:]*-+[\s:]*)+\|?$')

ZERO_WIDTH_SPACE = '\u200b'


class ParseError(Exception):
    """
    Generic exception thrown when the engine is used against its contract.
    """
    pass


class Dumper(object):

    def dump(self):
        d = {}
        for k, v in self.__dict__.items():
            if k == 'parent':
                d[k] = v
            elif isinstance(v, list):
                d[k] = [lv.dump() if hasattr(lv, 'dump') else lv for lv in v]
            else:
                d[k] = v.dump() if hasattr(v, 'dump') else v
        return (self.__class__.__name__, d)

    def __repr__(self):
        return '{0}({1})'.format(
            self.__class__.__name__,
            ', '.join('{0}={1!r}'.format(k, v) for k, v in self.__dict__.items() if k != 'parent'),
        )


# UTILITY FUNCTIONS
def is_blank(s):
    """ Returns true if string contains only space characters.
    """
    return bool(re.match(r'^\s*$', s))


def get_indent(line):
    """
    Width of the leading whitespace of a line.  Tabs count as two
    spaces for list nesting purposes.

    """
    match = re.match(r'^(\s*)', line)
    return len(match.group(1).replace('\t', '  '))


def parse_pipe_row(line):
    """ Split a pipe-delimited table row into stripped cells.
    """
    s = line.strip()
    if s.startswith('|'):
        s = s[1:]
    if s.endswith('|'):
        s = s[:-1]
    return [cell.strip() for cell in s.split('|')]


def is_list_start(s):
    """ Returns true if the (trimmed) line opens a list item.
    """
    return bool(reBulletStart.match(s) or reOrderedStart.match(s))


def is_block_starter(s):
    """
    Returns true if the (trimmed) line starts a block that interrupts
    a paragraph.

    """
    return (s.startswith('#') or
            s.startswith('```') or
            s.startswith('>') or
            is_list_start(s) or
            bool(reHrule.match(s)))
