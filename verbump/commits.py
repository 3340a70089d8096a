"""Conventional commit parsing (https://www.conventionalcommits.org)."""

import enum
import re

from verbump.errors import CommitFormatError


class CommitType(enum.Enum):
    """Commit types with their display priority and changelog heading."""

    BUG_FIX = ("fix", 0, "Bug Fixes")
    FEAT = ("feat", 1, "Features")
    PERFORMANCE = ("perf", 2, "Performance Improvements")
    REVERT = ("revert", 3, "Reverts")
    REFACTOR = ("refactor", 4, "Code Refactoring")
    BUILD = ("build", 5, "Builds")
    TEST = ("test", 6, "Tests")
    DOCS = ("docs", 7, "Documentation")
    CHORE = ("chore", 8, "Chores")
    CI = ("ci", 9, "Continuous Integration")
    STYLE = ("style", 10, "Styles")

    def __init__(self, prefix, display_priority, full_name):
        self.prefix = prefix
        self.display_priority = display_priority
        self.full_name = full_name

    @classmethod
    def from_prefix(cls, prefix):
        key = prefix.lower()
        for member in cls:
            if member.prefix == key:
                return member
        return None


HEADER_RE = re.compile(
    r"^(%s)(?:\(([\w\-]+)\))?(!)?:\s(.+)" % "|".join(t.prefix for t in CommitType),
    re.IGNORECASE,
)
TRAILER_RE = re.compile(r"^(?:([\w\-]+)(: | #)|(BREAKING CHANGE: ))(.*)")
BREAKING_PREFIXES = ("BREAKING CHANGE: ", "BREAKING-CHANGE: ")

_SPEC_ERROR = "Commit message does not meet conventional commit specification. "


def _breaking_line(lines):
    for line in lines:
        if line.startswith(BREAKING_PREFIXES):
            return line
    return None


class ConventionalCommit:
    """A parsed conventional commit: header, optional body and footer."""

    def __init__(self, header, body="", footer=""):
        match = HEADER_RE.match(header)
        if match is None:
            raise CommitFormatError(
                f"Commit header {header!r} does not meet conventional commit specification")
        self.raw_message = header
        self.type = CommitType.from_prefix(match.group(1))
        self.scope = match.group(2)
        self.message = match.group(4)
        self.body = body
        self.footer = footer
        self._header_breaking = match.group(3) is not None

    def is_breaking_change(self):
        return (self._header_breaking
                or _breaking_line(self.body.splitlines()) is not None
                or _breaking_line(self.footer.splitlines()) is not None)

    @property
    def breaking_change_description(self):
        """Text after the first BREAKING CHANGE token, footer first; else ''."""
        for section in (self.footer, self.body):
            line = _breaking_line(section.splitlines())
            if line is not None:
                for prefix in BREAKING_PREFIXES:
                    line = line.replace(prefix, "")
                return line.strip()
        if self._header_breaking:
            return self.message
        return ""

    def __repr__(self):
        return (f"ConventionalCommit(type={self.type.prefix}, scope={self.scope!r}, "
                f"message={self.message!r}, breaking={self.is_breaking_change()})")


def parse_raw_commit(raw_message):
    """Parse a raw commit message.

    Layout: a header line, then optionally a blank line followed by a body
    and/or a footer of git trailers (the footer is preceded by a blank line).
    Raises CommitFormatError when the message does not follow that layout.
    """
    if not raw_message or not raw_message.strip():
        raise CommitFormatError("Cannot parse empty commit message.")
    lines = re.split(r"\r\n|\n", raw_message)
    header = lines[0]
    body_lines = []
    footer_lines = []

    if len(lines) == 2:
        raise CommitFormatError(
            _SPEC_ERROR + "Conventional Commit should not be just two lines. "
            "Needs to be 1 or at least 3.")
    if len(lines) > 2:
        if lines[1] != "":
            raise CommitFormatError(
                _SPEC_ERROR + "Conventional Commit message should have a blank line "
                "before body and footer sections")
        in_footer = False
        previous = lines[1]
        for line in lines[2:]:
            is_trailer = TRAILER_RE.match(line) is not None
            if not in_footer and is_trailer:
                if previous != "":
                    raise CommitFormatError(
                        _SPEC_ERROR + "Must have blank line before footer section.")
                in_footer = True
            if in_footer:
                if is_trailer:
                    footer_lines.append(line)
                elif line != "":
                    raise CommitFormatError(
                        _SPEC_ERROR + "Lines in footer must follow git trailer convention.")
            else:
                body_lines.append(line)
            previous = line

    while body_lines and body_lines[-1] == "":
        body_lines.pop()

    return ConventionalCommit(
        header,
        body="\n".join(body_lines),
        footer="\n".join(footer_lines),
    )
