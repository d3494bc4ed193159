# core.py
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Tuple

# ---- messages ----
UPDATED_MSG = "Successfully updated version in {name} to {version}"
UP_TO_DATE_MSG = "No update needed. Version in {name} is already {version}"
NO_MATCH_MSG = "No matching dependency reference found in {name}. Expected format: {expected}"
MISSING_MSG = "{name} file not found in the project root directory."


# ---- errors ----
class StamperError(Exception):
    pass


class MissingDocumentError(StamperError, FileNotFoundError):
    """The README to stamp does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(MISSING_MSG.format(name=path.name))

    def __str__(self) -> str:
        return self.args[0]


class ConfigError(StamperError):
    pass


class DocumentEncodingError(StamperError):
    """The README exists but is not valid UTF-8."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"{path.name} is not valid UTF-8: {reason}")


# ---- types ----
class MatchResult(Enum):
    NOT_FOUND = "not_found"
    ALREADY_CURRENT = "already_current"
    STALE = "stale"


@dataclass(frozen=True)
class Coordinate:
    group: str
    artifact_id: str
    version: str

    @property
    def prefix(self) -> str:
        return f"{self.group}:{self.artifact_id}:"

    @property
    def expected_format(self) -> str:
        return f"{self.prefix}x.y.z"


@dataclass(frozen=True)
class Match:
    start: int
    end: int
    found: str


@dataclass
class StampOutcome:
    result: MatchResult
    message: str
    found: Optional[str]
    content: str


# ---- regex ----
# Token ends at whitespace, a quote, a backtick or closing/separating punctuation.
VERSION_TOKEN = r"""([^\s"'`()\[\]{}<>,;]+)"""


def coordinate_pattern(group: str, artifact_id: str) -> re.Pattern:
    return re.compile(re.escape(f"{group}:{artifact_id}:") + VERSION_TOKEN)


# ---- matching ----
def find_version(content: str, coordinate: Coordinate) -> Optional[Match]:
    """Locate the first version token after ``group:artifactId:``.

    Only the first occurrence in document order is returned.
    """
    m = coordinate_pattern(coordinate.group, coordinate.artifact_id).search(content)
    if not m:
        return None
    return Match(start=m.start(1), end=m.end(1), found=m.group(1))


def classify(content: str, coordinate: Coordinate) -> Tuple[MatchResult, Optional[Match]]:
    match = find_version(content, coordinate)
    if match is None:
        return MatchResult.NOT_FOUND, None
    if match.found == coordinate.version:
        return MatchResult.ALREADY_CURRENT, match
    return MatchResult.STALE, match


def replace_version(content: str, match: Match, version: str) -> str:
    return content[: match.start] + version + content[match.end:]


# ---- apply ----
def _check_inputs(group: str, artifact_id: str, version: str) -> None:
    for label, value in (("group", group), ("artifact_id", artifact_id)):
        if not value:
            raise ValueError(f"{label} must not be empty")
        if ":" in value:
            raise ValueError(f"{label} must not contain ':' (got {value!r})")
    if not version:
        raise ValueError("version must not be empty")


def apply(
    group: str,
    artifact_id: str,
    version: str,
    path,
    log: Callable[[str], None] = print,
) -> StampOutcome:
    """Stamp ``version`` into the first ``group:artifact_id:<token>`` of a document.

    Exactly one message goes to ``log`` per call. The file is written only when
    the found token differs from ``version``. A missing document raises
    :class:`MissingDocumentError` before anything is reported.
    """
    _check_inputs(group, artifact_id, version)
    path = Path(path)
    if not path.is_file():
        raise MissingDocumentError(path)

    # newline="" keeps CRLF and friends untouched on both read and write
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except UnicodeDecodeError as e:
        raise DocumentEncodingError(path, e.reason) from e

    coordinate = Coordinate(group, artifact_id, version)
    result, match = classify(content, coordinate)

    if result is MatchResult.NOT_FOUND:
        message = NO_MATCH_MSG.format(name=path.name, expected=coordinate.expected_format)
        log(message)
        return StampOutcome(result, message, None, content)

    if result is MatchResult.ALREADY_CURRENT:
        message = UP_TO_DATE_MSG.format(name=path.name, version=version)
        log(message)
        return StampOutcome(result, message, match.found, content)

    updated = replace_version(content, match, version)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(updated)

    message = UPDATED_MSG.format(name=path.name, version=version)
    log(message)
    return StampOutcome(result, message, match.found, updated)
