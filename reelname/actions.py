"""Place parsed files in the library folder."""
import json
import logging
import os
import shutil
from pathlib import Path

from .models import ActionResult, ParsedFile

log = logging.getLogger(__name__)

ACTIONS = ("symlink", "hardlink", "copy", "move")


def _symlink(source: Path, target: Path) -> None:
    # Link with a path relative to the target folder so the library can move.
    real_source = source.resolve(strict=True)
    relative = os.path.relpath(real_source, target.parent)
    log.info("Using relative path %s for symlink %s", relative, target)
    os.symlink(relative, target)


def _hardlink(source: Path, target: Path) -> None:
    os.link(source, target)


def _copy(source: Path, target: Path) -> None:
    shutil.copyfile(source, target)


def _move(source: Path, target: Path) -> None:
    shutil.move(source, target)


_HANDLERS = {
    "symlink": _symlink,
    "hardlink": _hardlink,
    "copy": _copy,
    "move": _move,
}


def write_result(result: ActionResult, json_file: Path | None = None) -> None:
    """Write *result* as JSON to *json_file*, or to stdout with a marker."""
    payload = json.dumps(result.to_dict(), indent=2)
    if json_file:
        Path(json_file).write_text(payload, encoding='utf-8')
        log.debug("JSON output written to %s", json_file)
    else:
        print(f"JSON_RESULT:{payload}")


def act(
    parsed: ParsedFile,
    target_folder: Path,
    action: str,
    json_output: bool = False,
    json_file: Path | None = None,
) -> ActionResult | None:
    """
    Place *parsed* under *target_folder* using *action*.

    An existing target is never overwritten.  With ``dry_run`` set in the
    file's options only the intended action is logged.

    Args:
        parsed: The parsed file.
        target_folder: Library root for this kind of media.
        action: One of ``ACTIONS``.
        json_output: Emit the result as JSON.
        json_file: Write JSON here instead of stdout.

    Returns:
        The ActionResult, or None when the target already existed.

    Raises:
        ValueError: If *action* is unknown.
        OSError: If the filesystem operation fails.
    """
    if action not in _HANDLERS:
        raise ValueError(f"Unknown action '{action}', expected one of {', '.join(ACTIONS)}")

    source = Path(parsed.source_path()).absolute()
    target = Path(target_folder) / parsed.target_name()

    if parsed.options.dry_run:
        log.info("--dry-run enabled, not acting on file: %s %s -> %s", action, source, target)
    else:
        target.parent.mkdir(parents=True, exist_ok=True)
        if os.path.lexists(target):
            log.warning("File %s already exists, doing nothing", target)
            return None
        log.info("Acting on file: %s %s -> %s", action, source, target)
        _HANDLERS[action](source, target)

    result = ActionResult.from_parsed(parsed, str(source), str(target), action)
    if json_output:
        write_result(result, json_file)
    return result
