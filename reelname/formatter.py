"""Formatter module for generating target file names."""
from typing import Mapping

from .models import ParsedFile

# Placeholder -> ParsedFile attribute.
SERIES_PLACEHOLDERS = {
    "s": "season",
    "e": "episode",
    "x": "episode_name",
}
COMMON_PLACEHOLDERS = {
    "n": "clean_name",
    "r": "resolution",
    "q": "quality",
    "y": "year",
}


def render_template(template: str, values: Mapping[str, str]) -> str:
    """
    Substitute ``{key}`` placeholders in *template*.

    Args:
        template: The template string, e.g. ``"{n} ({y})"``.
        values: Placeholder name to replacement text.

    Returns:
        Rendered string. Unknown placeholders are left as they are.
    """
    result = template
    for key, value in values.items():
        result = result.replace(f"{{{key}}}", value)
    return result


def _values(parsed: ParsedFile, placeholders: Mapping[str, str]) -> dict[str, str]:
    return {key: getattr(parsed, attr) for key, attr in placeholders.items()}


def target_name(parsed: ParsedFile) -> str:
    """
    Build the name a parsed file should be placed under.

    Movies and series use the templates from ``parsed.options``;
    unclassified files keep their own name.

    Args:
        parsed: The parsed file.

    Returns:
        Rendered name with the original extension appended.
    """
    if parsed.is_movie:
        name = parsed.options.movie_format
    elif parsed.is_series:
        name = render_template(parsed.options.series_format, _values(parsed, SERIES_PLACEHOLDERS))
    else:
        name = parsed.file_name

    name = render_template(name, _values(parsed, COMMON_PLACEHOLDERS))
    name = name.strip(' ')

    # An empty last placeholder can leave a dangling dot before the extension.
    if name.endswith('.'):
        name = name[:-1]

    return name + parsed.extension
