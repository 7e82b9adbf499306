"""
Per-document parse state: link reference definitions and footnotes.

A ParseState is created for every top-level render and handed to the
block parser, the inline parser and the renderer.  Nested renders of the
same document (blockquote contents) share it.

"""

import logging

from .common import Dumper

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class LinkReference(Dumper):

    def __init__(self, url, title=None):
        super(LinkReference, self).__init__()
        self.url = url
        self.title = title


class FootnoteDefinition(Dumper):

    def __init__(self, content, index):
        super(FootnoteDefinition, self).__init__()
        self.content = content
        self.index = index


class ParseState(Dumper):

    def __init__(self):
        super(ParseState, self).__init__()
        self.link_refs = {}
        self.footnotes = {}
        self.footnote_counter = 0

    def reset(self):
        """ Forget every definition.  Call before parsing a new document.
        """
        self.link_refs = {}
        self.footnotes = {}
        self.footnote_counter = 0

    def set_link_ref(self, ref_id, url, title=None):
        logger.debug('Link reference [%s] -> %s', ref_id, url)
        self.link_refs[ref_id.lower()] = LinkReference(url, title)

    def get_link_ref(self, ref_id):
        """ Case-insensitive lookup, returns None for unknown ids.
        """
        return self.link_refs.get(ref_id.lower())

    def set_footnote(self, fn_id, content):
        """
        Register a footnote.  Indexes follow the order in which definitions
        are met, not the order of the citations.

        """
        self.footnote_counter += 1
        logger.debug('Footnote [^%s] numbered %d', fn_id, self.footnote_counter)
        self.footnotes[fn_id] = FootnoteDefinition(content, self.footnote_counter)

    def footnotes_in_order(self):
        return sorted(self.footnotes.items(), key=lambda item: item[1].index)
