#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/cmark_translate/shortcodes.py
"""Hide template shortcodes from the Markdown parser and the translator.

Static site generators embed directives such as ``{{ figure src="a.png" }}``
or ``{% include "b.html" %}`` in Markdown. Neither CommonMark nor the
translation service understands them, so before parsing every directive is
disguised as an HTML comment (``<!--{{ ... }}-->``). The parser then keeps
it as raw HTML, the translator ignores it, and after rendering the
disguise is removed again.

Escaping runs two passes, ``{{ }}`` first and ``{% %}`` second. An opening
marker without a closing one swallows the rest of the input. Unescaping
runs the passes in reverse order and always restores the closing marker,
so ``unescape_shortcodes(escape_shortcodes(text)) == text`` holds for
well-formed directives anywhere in the text. An unterminated directive
comes back with the closing marker it was missing.

Examples
--------
    >>> escape_shortcodes("See {{ shortcode a }} and {% tag b %} here.")
    'See <!--{{ shortcode a }}--> and <!--{% tag b %}--> here.'
    >>> escape_shortcodes("prefix {{ oops")
    'prefix <!--{{ oops}}-->'
    >>> unescape_shortcodes("prefix <!--{{ oops}}-->")
    'prefix {{ oops}}'

"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

# (opening marker, closing marker), in escape order
SHORTCODE_MARKERS: tuple[tuple[str, str], ...] = (("{{", "}}"), ("{%", "%}"))


def _escape_pass(text: str, opener: str, closer: str) -> str:
    parts: list[str] = []
    rest = text
    while True:
        before, found, after = rest.partition(opener)
        parts.append(before)
        if not found:
            break
        body, closed, rest = after.partition(closer)
        parts.append(f"{COMMENT_OPEN}{opener}{body}{closer}{COMMENT_CLOSE}")
        if not closed:
            logger.debug("Unterminated shortcode %r swallows the remaining %d characters", opener, len(body))
            break
    return "".join(parts)


def _unescape_pass(text: str, opener: str, closer: str) -> str:
    disguised_open = COMMENT_OPEN + opener
    disguised_close = closer + COMMENT_CLOSE

    parts: list[str] = []
    rest = text
    while True:
        before, found, after = rest.partition(disguised_open)
        parts.append(before)
        if not found:
            break
        body, closed, rest = after.partition(disguised_close)
        # the closer is always restored, even when the disguise itself is cut off
        parts.append(f"{opener}{body}{closer}")
        if not closed:
            break
    return "".join(parts)


def escape_shortcodes(text: str) -> str:
    """Disguise ``{{ ... }}`` and ``{% ... %}`` directives as HTML comments.

    Parameters
    ----------
    text : str
        Markdown source

    Returns
    -------
    str
        Source with every directive wrapped in ``<!--`` and ``-->``

    """
    for opener, closer in SHORTCODE_MARKERS:
        text = _escape_pass(text, opener, closer)
    return text


def unescape_shortcodes(text: str) -> str:
    """Remove the comment disguise added by :func:`escape_shortcodes`.

    Parameters
    ----------
    text : str
        Rendered Markdown containing disguised directives

    Returns
    -------
    str
        Markdown with the original directives restored

    """
    for opener, closer in reversed(SHORTCODE_MARKERS):
        text = _unescape_pass(text, opener, closer)
    return text
