"""Persisted, ranked leaderboard."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging
import re

logger = logging.getLogger(__name__)

MAX_ENTRIES = 200
MAX_NAME_LENGTH = 16
DEFAULT_NAME = "Player"

_QUOTE = '"'
_ESCAPE = "\\"
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True, slots=True)
class ScoreEntry:
    """A single name/score pair."""

    name: str
    score: int


def sanitize_name(raw: str) -> str:
    """Keep alphanumerics, underscore and hyphen; cap the length; never return empty."""
    kept = [ch for ch in raw if ch.isascii() and (ch.isalnum() or ch in "_-")]
    return "".join(kept[:MAX_NAME_LENGTH]) or DEFAULT_NAME


def rank_key(entry: ScoreEntry) -> tuple[int, str]:
    """Sort key: highest score first, ties broken by name."""
    return (-entry.score, entry.name)


def quote_name(name: str) -> str:
    """Wrap a name in double quotes, escaping quotes and backslashes."""
    escaped = name.replace(_ESCAPE, _ESCAPE * 2).replace(_QUOTE, _ESCAPE + _QUOTE)
    return f"{_QUOTE}{escaped}{_QUOTE}"


def format_line(entry: ScoreEntry) -> str:
    return f"{quote_name(entry.name)} {entry.score}"


def _read_quoted(text: str) -> tuple[str, str] | None:
    """Read a leading quoted token; return (name, remainder) or None."""
    if not text.startswith(_QUOTE):
        return None
    chars: list[str] = []
    idx = 1
    while idx < len(text):
        ch = text[idx]
        if ch == _ESCAPE and idx + 1 < len(text):
            chars.append(text[idx + 1])
            idx += 2
            continue
        if ch == _QUOTE:
            return "".join(chars), text[idx + 1 :]
        chars.append(ch)
        idx += 1
    return None


def _leading_int(text: str) -> int | None:
    """Read a signed integer prefix after leading whitespace; trailing text is ignored."""
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))


def parse_line(line: str) -> ScoreEntry | None:
    """Parse ``"name" score`` or the bare ``name score`` fallback."""
    text = line.strip()
    if not text:
        return None

    quoted = _read_quoted(text)
    if quoted is not None:
        name, rest = quoted
        score = _leading_int(rest)
        if score is not None:
            return ScoreEntry(name, score)

    tokens = text.split()
    if len(tokens) < 2:
        return None
    score = _leading_int(tokens[1])
    if score is None:
        return None
    return ScoreEntry(tokens[0], score)


class Leaderboard:
    """Sorted, capped list of scores mirrored to a text file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.entries: list[ScoreEntry] = []
        self.load()

    def __len__(self) -> int:
        return len(self.entries)

    def load(self) -> None:
        """Replace in-memory entries with the file contents."""
        self.entries = []
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                lines = handle.readlines()
        except FileNotFoundError:
            logger.debug("No leaderboard at %s yet", self.path)
            return
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read leaderboard %s; starting empty", self.path, exc_info=True)
            return

        for lineno, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            entry = parse_line(line)
            if entry is None:
                logger.debug("Skipping malformed leaderboard line %d: %r", lineno, line)
                continue
            self.entries.append(entry)
        self._sort_and_trim()

    def save(self) -> None:
        """Overwrite the file with the current entries; a write failure is logged and ignored."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                for entry in self.entries:
                    handle.write(format_line(entry) + "\n")
        except OSError:
            logger.warning("Could not write leaderboard %s", self.path, exc_info=True)

    def add(self, name: str, score: int) -> ScoreEntry:
        """Record a score under a sanitized name and persist."""
        entry = ScoreEntry(sanitize_name(name), int(score))
        self.entries.append(entry)
        self._sort_and_trim()
        self.save()
        logger.info("Recorded %s with %d points", entry.name, entry.score)
        return entry

    def top(self, n: int = 3) -> list[ScoreEntry]:
        return self.entries[: max(0, n)]

    def all(self) -> list[ScoreEntry]:
        return list(self.entries)

    def rank_of(self, entry: ScoreEntry) -> int | None:
        """Return the 1-based position of entry, or None if it fell off the board."""
        for idx, candidate in enumerate(self.entries, start=1):
            if candidate == entry:
                return idx
        return None

    def _sort_and_trim(self) -> None:
        self.entries.sort(key=rank_key)
        del self.entries[MAX_ENTRIES:]
