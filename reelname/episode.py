"""Episode token parsing.

Turns raw episode tokens such as ``"22"``, ``"E22"``, ``"22-23"``,
``"E22-E23"``, ``"E22E23"`` or ``"22E23"`` into an :class:`EpisodeInfo`.
"""
import re

from .models import EpisodeInfo

# Optional leading E, start digits, then "-", "-E" or "E" and end digits.
_EPISODE_TOKEN = re.compile(r'E?([0-9]+)(?:(?:-E?|E)([0-9]+))?')


class EpisodeParseError(ValueError):
    """Raised when an episode token does not follow the episode grammar."""
    pass


def parse_episode_string(token: str) -> EpisodeInfo:
    """
    Parse an episode token into a start/end pair.

    Args:
        token: Raw episode token, surrounding whitespace is ignored.

    Returns:
        EpisodeInfo with ``is_range`` set when two numbers were found.

    Raises:
        EpisodeParseError: If the token is empty, malformed, or the
            range runs backwards.
    """
    if not token or not token.strip():
        raise EpisodeParseError("empty episode string")

    token = token.strip()
    match = _EPISODE_TOKEN.fullmatch(token)
    if not match:
        raise EpisodeParseError(f"invalid episode format: {token}")

    start = int(match.group(1))
    if match.group(2) is None:
        return EpisodeInfo(start=start, end=start, is_range=False)

    end = int(match.group(2))
    if start > end:
        raise EpisodeParseError(
            f"start episode ({start}) cannot be greater than end episode ({end})"
        )
    return EpisodeInfo(start=start, end=end, is_range=True)
