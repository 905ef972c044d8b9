"""
Engine Pruning
==============

The generator downloads native engines for several platforms. Only the
deployment platform's variant is needed at runtime; the others would push
the bundle over the function size limit, so they are deleted.

Patterns use gitignore syntax (``pathspec`` "gitignore" patterns) and are
matched against files only:
- evaluated in order, the last matching pattern decides
- ``!pattern`` takes back paths selected by earlier patterns
- ``*`` never crosses a ``/``; only a trailing ``/**`` reaches into
  subdirectories
"""

import shutil
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from pathspec.pattern import Pattern
from pathspec.util import iter_tree_files, lookup_pattern, normalize_file

from prismapack.common.constants import DEFAULT_ENGINE_PATTERNS
from prismapack.common.errors import PruneError
from prismapack.common.logger import get_logger

logger = get_logger(__name__)

PATTERN_STYLE = "gitignore"

CompiledPattern = Tuple[str, Pattern]


def compile_patterns(patterns: Sequence[str]) -> List[CompiledPattern]:
    """Compile ordered include/exclude patterns, skipping blanks and comments."""
    factory = lookup_pattern(PATTERN_STYLE)
    compiled: List[CompiledPattern] = []
    for line in patterns:
        if not line or not line.strip():
            continue
        pattern = factory(line.strip())
        if pattern.include is not None:
            compiled.append((line.strip(), pattern))
    return compiled


def _parents(path: str) -> List[str]:
    parts = path.split("/")
    return ["/".join(parts[:i]) for i in range(1, len(parts))]


def pattern_matches(source: str, pattern: Pattern, path: str) -> bool:
    """
    Match one pattern against one file path.

    gitignore patterns also cover everything below a matching directory.
    That only counts for patterns ending in ``/**``; otherwise a file whose
    parent directory matches is not a match itself.

    Example:
        >>> source, pattern = compile_patterns(["engines/q*"])[0]
        >>> pattern_matches(source, pattern, "engines/query-darwin")
        True
        >>> pattern_matches(source, pattern, "engines/query-nested/file")
        False
    """
    if pattern.match_file(path) is None:
        return False
    if source.rstrip("/").endswith("/**"):
        return True
    return not any(pattern.match_file(parent) is not None for parent in _parents(path))


def is_unused(path: str, compiled: Sequence[CompiledPattern]) -> bool:
    """Whether the last pattern matching ``path`` selects it for deletion."""
    selected = False
    for source, pattern in compiled:
        if pattern_matches(source, pattern, path):
            selected = bool(pattern.include)
    return selected


def find_unused_engines(build_dir: Union[str, Path], patterns: Optional[Sequence[str]] = None) -> List[str]:
    """
    List engine files under ``build_dir`` that should be deleted.

    Symlinks are not followed, so a linked directory never exposes files
    outside the bundle.

    Args:
        build_dir: Bundle directory to scan
        patterns: Ordered patterns (defaults to the built-in engine table)

    Returns:
        Sorted POSIX paths relative to ``build_dir``; empty if the directory
        does not exist or nothing matches
    """
    root = Path(build_dir)
    if not root.is_dir():
        return []

    compiled = compile_patterns(DEFAULT_ENGINE_PATTERNS if patterns is None else patterns)
    if not compiled:
        return []

    files = (normalize_file(path) for path in iter_tree_files(str(root), follow_links=False))
    return sorted(path for path in files if is_unused(path, compiled))


def delete_artifact(path: Path) -> None:
    """Delete a file, link or directory; an already missing path is fine."""
    try:
        if path.is_symlink() or path.is_file():
            path.unlink(missing_ok=True)
        elif path.is_dir():
            shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise PruneError(f"Failed to delete engine artifact {path}: {e}") from e


def prune_engines(build_dir: Union[str, Path], patterns: Optional[Sequence[str]] = None) -> List[str]:
    """
    Delete unused engine binaries from a bundle.

    Running it again on the same bundle finds nothing and does nothing.

    Returns:
        Relative paths that were deleted
    """
    unused = find_unused_engines(build_dir, patterns)
    if not unused:
        return []

    logger.info("Remove unused prisma engine:")
    root = Path(build_dir)
    for engine in unused:
        logger.info(f"  - {engine}")
        delete_artifact(root / engine)
    return unused
