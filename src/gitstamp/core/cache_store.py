"""Cache Store: version report <-> sectioned ini file.

One section per component id. Resolved entries carry `version`, `date` and
`origin`; failed entries carry `error` and/or `note`, flattened to a single
line (multi-line messages are joined with spaces). The file starts with
a static preamble of comment lines whose shebang makes the file render
itself as a table when executed.
"""

import configparser
import io
import logging
import os
import tempfile
from pathlib import Path

from gitstamp.core.types import ComponentVersion, FailedVersion, ResolvedVersion, VersionReport

logger = logging.getLogger(__name__)

CACHE_PREAMBLE = (
    "#!/usr/bin/env -S gitstamp show --format details --cached --cache-file\n"
    ";\n"
    ";\tVersion info - generated by gitstamp\n"
    ";\n"
    ";\tExecute this file to view it as a table. Do not edit; it is\n"
    ";\trebuilt whenever a component repository advances.\n"
    ";\n"
)


class CacheWriteError(RuntimeError):
    """Raised when a freshly built report cannot be persisted."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"Cannot write version cache {path}: {message}")
        self.path = path


def _new_parser() -> configparser.ConfigParser:
    # No interpolation: origin URLs may contain '%' escapes
    return configparser.ConfigParser(interpolation=None)


def _single_line(text: str) -> str:
    # Continuation lines starting with '#' or ';' would be read back as comments
    return " ".join(text.splitlines())


def _section_for(version: ComponentVersion) -> dict[str, str]:
    if isinstance(version, ResolvedVersion):
        return {"version": version.version, "date": version.date, "origin": version.origin}
    section: dict[str, str] = {}
    if version.error is not None:
        section["error"] = _single_line(version.error)
    if version.note is not None:
        section["note"] = _single_line(version.note)
    return section


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _version_from(section: configparser.SectionProxy) -> ComponentVersion:
    if "version" in section:
        return ResolvedVersion(
            version=section["version"],
            date=section.get("date", ""),
            origin=section.get("origin", ""),
        )
    return FailedVersion(error=section.get("error"), note=section.get("note"))


def render_version_report(report: VersionReport) -> str:
    """Serialize a report, preamble included."""
    parser = _new_parser()
    for component_id, version in report.items():
        parser[component_id] = _section_for(version)

    buffer = io.StringIO()
    buffer.write(CACHE_PREAMBLE)
    parser.write(buffer)
    return buffer.getvalue()


def write_version_report(report: VersionReport, path: Path) -> None:
    """Write the report atomically: temp file in the same directory, then rename.

    Readers see either the previous file or the complete new one.

    Args:
        report: Report to persist
        path: Cache file location; parent directories are created

    Raises:
        CacheWriteError: If the directory, temp file or rename fails
    """
    content = render_version_report(report)
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # NamedTemporaryFile creates 0600; other users must be able to read the cache
        os.chmod(tmp_path, _default_file_mode())
        os.replace(tmp_path, path)
    except OSError as e:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise CacheWriteError(path, str(e)) from e

    logger.debug("Wrote %d components to %s", len(report), path)


def read_version_report(path: Path) -> VersionReport | None:
    """Load a report written by write_version_report.

    Args:
        path: Cache file location

    Returns:
        The report (possibly empty), or None if the file is missing or unparsable
    """
    if not path.exists():
        return None

    parser = _new_parser()
    try:
        parser.read_string(path.read_text(encoding="utf-8"), source=str(path))
    except (OSError, UnicodeDecodeError, configparser.Error) as e:
        logger.warning("Ignoring unreadable version cache %s: %s", path, e)
        return None

    return {name: _version_from(parser[name]) for name in parser.sections()}
