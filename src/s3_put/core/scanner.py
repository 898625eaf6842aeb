"""Local file selection: Ant style include/exclude patterns over a directory."""

from fnmatch import fnmatchcase
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple

from .exceptions import ScanError
from .protocols import LoggerProtocol

DEFAULT_EXCLUDES: Tuple[str, ...] = (
    # Miscellaneous typical temporary files
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    # CVS
    "**/CVS",
    "**/CVS/**",
    "**/.cvsignore",
    # SCCS
    "**/SCCS",
    "**/SCCS/**",
    # Visual SourceSafe
    "**/vssver.scc",
    # Subversion
    "**/.svn",
    "**/.svn/**",
    # Mac
    "**/.DS_Store",
    # Git
    "**/.git",
    "**/.git/**",
    "**/.gitattributes",
    "**/.gitignore",
    "**/.gitmodules",
    # Mercurial
    "**/.hg",
    "**/.hg/**",
    "**/.hgignore",
    "**/.hgsub",
    "**/.hgsubstate",
    "**/.hgtags",
    # Bazaar
    "**/.bzr",
    "**/.bzr/**",
    "**/.bzrignore",
)

Pattern = Tuple[str, ...]


def compile_pattern(pattern: str) -> Pattern:
    """Split a pattern into segments; a trailing slash means everything below."""
    normalized = pattern.strip().replace("\\", "/")
    if normalized.endswith("/"):
        normalized += "**"
    return tuple(part for part in normalized.split("/") if part)


@lru_cache(maxsize=4096)
def match_segments(pattern: Pattern, path: Tuple[str, ...]) -> bool:
    """Match path segments against pattern segments; ``**`` spans any depth."""
    if not pattern:
        return not path

    head = pattern[0]
    if head == "**":
        rest = pattern[1:]
        return any(match_segments(rest, path[i:]) for i in range(len(path) + 1))

    if not path or not fnmatchcase(path[0], head):
        return False
    return match_segments(pattern[1:], path[1:])


def match_path(pattern: str, relative_path: str) -> bool:
    """Match a single "/"-separated relative path against one pattern."""
    parts = tuple(part for part in relative_path.replace("\\", "/").split("/") if part)
    return match_segments(compile_pattern(pattern), parts)


class DirectoryScanner:
    """File selection engine backed by the local filesystem.

    Files are returned relative to the base directory with "/" separators,
    depth first, entries of each directory in name order.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        self._logger = logger

    def expand(
        self,
        base_dir: Path,
        includes: Sequence[str],
        excludes: Sequence[str],
        default_excludes: bool = True,
    ) -> List[str]:
        base = Path(base_dir)
        try:
            if not base.exists():
                raise ScanError(f"{base} does not exist.")
            if not base.is_dir():
                raise ScanError(f"{base} is not a directory.")
        except OSError as exc:
            raise ScanError(f"Cannot read directory {base}: {exc}") from exc

        include_patterns = [compile_pattern(p) for p in (includes or ["**"])]
        exclude_list = list(excludes)
        if default_excludes:
            exclude_list.extend(DEFAULT_EXCLUDES)
        exclude_patterns = [compile_pattern(p) for p in exclude_list]

        try:
            entries = self._list_dir(base)
        except OSError as exc:
            raise ScanError(f"Cannot read directory {base}: {exc}") from exc

        files: List[str] = []
        visited: Set[Path] = {base.resolve()}
        self._scan(entries, (), include_patterns, exclude_patterns, files, visited)
        return files

    def _scan(
        self,
        entries: List[Path],
        parts: Tuple[str, ...],
        include_patterns: List[Pattern],
        exclude_patterns: List[Pattern],
        files: List[str],
        visited: Set[Path],
    ) -> None:
        for entry in entries:
            rel_parts = parts + (entry.name,)

            try:
                is_dir = entry.is_dir()
                is_file = not is_dir and entry.is_file()
            except OSError as exc:
                self._skip(entry, exc)
                continue

            if is_dir:
                if self._is_pruned(rel_parts, exclude_patterns):
                    continue
                real = entry.resolve()
                if real in visited:
                    continue
                visited.add(real)
                try:
                    children = self._list_dir(entry)
                except OSError as exc:
                    self._skip(entry, exc)
                    continue
                self._scan(
                    children, rel_parts, include_patterns, exclude_patterns, files, visited
                )
            elif is_file:
                if any(match_segments(p, rel_parts) for p in include_patterns) and not any(
                    match_segments(p, rel_parts) for p in exclude_patterns
                ):
                    files.append("/".join(rel_parts))

    def _skip(self, entry: Path, exc: OSError) -> None:
        if self._logger is not None:
            self._logger.debug(f"Skipping unreadable entry {entry}: {exc}")

    @staticmethod
    def _list_dir(directory: Path) -> List[Path]:
        return sorted(directory.iterdir(), key=lambda p: p.name)

    @staticmethod
    def _is_pruned(dir_parts: Tuple[str, ...], exclude_patterns: List[Pattern]) -> bool:
        # "X/**" excludes everything below X, so X need not be listed.
        return any(
            pattern[-1:] == ("**",) and match_segments(pattern[:-1], dir_parts)
            for pattern in exclude_patterns
        )
