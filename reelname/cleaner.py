"""Reduce a release filename to a human readable title.

The parser decides *what* a file is; this module works out what to call
it.  Every matcher in the table is run again against the working name
and whatever it finds is cut out, then the leftover debris is trimmed
and the title is re-cased.
"""
import logging
import re
from typing import Iterable, Sequence

from .patterns import MINOR_WORDS, MOVIE_IGNORED, Matcher

log = logging.getLogger(__name__)

# Two or more spaces mark the gap between the title and trailing junk.
_TRAILING_DEBRIS = re.compile(r'\s{2,}.*')

_SEPARATORS = re.compile(r'[._]')


def strip_matches(
    name: str,
    matchers: Sequence[Matcher],
    skip: Iterable[str] = (),
) -> str:
    """Remove the span of every matcher that hits *name*.

    Matchers with a ``strip_group`` only lose that captured group, at the
    position it matched.  The others lose every occurrence of the
    pattern.  Any removal that leaves fewer than two non-space characters
    is rolled back.
    """
    skip = frozenset(skip)
    for matcher in matchers:
        if matcher.name in skip:
            continue
        match = matcher.pattern.search(name)
        if not match:
            continue

        if matcher.strip_group is not None:
            group = matcher.strip_group
            if not match.group(group):
                continue
            stripped = name[:match.start(group)] + ' ' + name[match.end(group):]
        else:
            stripped = matcher.pattern.sub(' ', name)

        if len(stripped.replace(' ', '')) < 2:
            log.debug(
                "Stripping %s left less than two characters (%r -> %r), reverting",
                matcher.name, name, stripped,
            )
            continue
        name = stripped
    return name


def proper_title_case(text: str) -> str:
    """Title-case *text*, keeping minor words lower-case after the first word."""
    words = text.split()
    for i, word in enumerate(words):
        lower = word.lower()
        if i == 0 or lower not in MINOR_WORDS:
            words[i] = '-'.join(part[:1].upper() + part[1:] for part in lower.split('-'))
        else:
            words[i] = lower
    return ' '.join(words)


def clean_name(
    file_name: str,
    matchers: Sequence[Matcher],
    *,
    is_movie: bool = False,
    is_series: bool = False,
    is_anime: bool = False,
    skip: Iterable[str] = (),
) -> str:
    """
    Build the clean title for a parsed file.

    Args:
        file_name: Base name of the file without extension.
        matchers: Ordered matcher table.
        is_movie: Season/episode/anime spans are left alone for movies.
        is_series: Every matcher span is removed for series.
        is_anime: Skip debris truncation and title-casing.
        skip: Matcher names to leave alone, usually the ones that did not
              contribute to the classification.

    Returns:
        The cleaned title, without colons.
    """
    name = _SEPARATORS.sub(' ', file_name)

    if is_movie:
        name = strip_matches(name, matchers, skip=MOVIE_IGNORED | frozenset(skip))
    elif is_series:
        name = strip_matches(name, matchers, skip=skip)

    name = name.strip(' ')

    # Anime titles are often stylised; casing them would do more harm than good.
    if not is_anime:
        log.debug("Probably not anime so cleaning a bit more: %r", name)
        name = _TRAILING_DEBRIS.sub('', name)
        name = proper_title_case(name)

    return name.replace(':', '')
