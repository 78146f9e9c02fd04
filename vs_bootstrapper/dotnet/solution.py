"""Parse .sln files (custom text format, not XML)."""

import re
from dataclasses import dataclass, field
from pathlib import Path

from vs_bootstrapper.core.exceptions import MalformedSolutionError, NotFoundError
from vs_bootstrapper.utils.logging import get_logger

logger = get_logger(__name__)

# Project("{TYPE-GUID}") = "Name", "Path\To\Project.csproj", "{PROJECT-GUID}"
PROJECT_LINE_PATTERN = r'Project\("[^"]+"\)\s*=\s*"([^"]+)",\s*"([^"]+)",\s*"[^"]+"'

_PROJECT_LINE_RE = re.compile(PROJECT_LINE_PATTERN)
_PROJECT_TOKEN = "Project("


@dataclass(frozen=True)
class SolutionEntry:
    """A project entry from a .sln file."""

    name: str
    path: str  # relative to the solution directory, separators verbatim


@dataclass
class Solution:
    """Projects declared by one solution file, in declaration order."""

    path: Path
    projects: list[SolutionEntry] = field(default_factory=list)


class SolutionParser:
    """
    Line-oriented parser for Visual Studio solution files.

    Only lines starting with the ``Project(`` token are validated against
    the declaration grammar; every other line (sections, globals, blank
    lines) is ignored.
    """

    def parse(self, path: Path | str) -> Solution:
        """
        Parse a solution file.

        Args:
            path: Path to the .sln file

        Returns:
            Solution with its project entries

        Raises:
            NotFoundError: If the file cannot be read
            MalformedSolutionError: If a project declaration line is malformed
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8-sig", errors="replace") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise NotFoundError(path, e.strerror) from e

        solution = Solution(path=path)
        for line_number, line in enumerate(lines, start=1):
            entry = self._parse_line(path, line_number, line)
            if entry is not None:
                solution.projects.append(entry)

        logger.debug(f"Parsed {len(solution.projects)} project entries from {path}")
        return solution

    @staticmethod
    def _parse_line(path: Path, line_number: int, line: str) -> SolutionEntry | None:
        stripped = line.strip()
        if not stripped.startswith(_PROJECT_TOKEN):
            return None

        match = _PROJECT_LINE_RE.fullmatch(stripped)
        if match is None:
            raise MalformedSolutionError(path, line_number, PROJECT_LINE_PATTERN)

        return SolutionEntry(name=match.group(1), path=match.group(2))
