import os
import stat
from pathlib import Path
from typing import Callable, Iterable, Optional, Set, Union

# visit(path, is_dir, error)
WalkCallback = Callable[[Path, bool, Optional[OSError]], None]


def normalize_suffixes(include: Union[str, Iterable[str]]) -> Set[str]:
    """Turn ``".txt, MD,py"`` (or an iterable) into ``{".txt", ".md", ".py"}``."""
    if isinstance(include, str):
        include = include.split(",")
    suffixes: Set[str] = set()
    for raw in include:
        s = raw.strip()
        if not s:
            continue
        if not s.startswith("."):
            s = "." + s
        suffixes.add(s.lower())
    return suffixes


def has_suffix(path: Path, suffixes: Set[str]) -> bool:
    return path.suffix.lower() in suffixes


def is_special_file(path: Path) -> bool:
    """True for FIFOs, sockets, devices and symlinks to directories.

    A path whose stat fails is not special; the caller records the error.
    """
    try:
        st = path.stat()
    except OSError:
        return False
    return not stat.S_ISREG(st.st_mode)


def to_relative_posix(path: Path, root: Path) -> str:
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        rel = str(path)
    return rel.replace(os.sep, "/").replace("\\", "/")


def walk_dir(root: Path, visit: WalkCallback) -> None:
    """Depth-first walk calling ``visit`` for ``root`` and every entry below it.

    Entries are visited in lexical order. Symlinked directories are reported
    as files and not descended into. When a directory cannot be listed,
    ``visit`` receives the error and the walk moves on to its siblings.
    """
    try:
        is_dir = root.is_dir()
    except OSError as exc:
        visit(root, False, exc)
        return
    if not root.exists():
        visit(root, False, FileNotFoundError(2, "No such file or directory", str(root)))
        return
    visit(root, is_dir, None)
    if is_dir:
        _walk_children(root, visit)


def _walk_children(directory: Path, visit: WalkCallback) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        visit(directory, True, exc)
        return

    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as exc:
            visit(path, False, exc)
            continue
        visit(path, is_dir, None)
        if is_dir:
            _walk_children(path, visit)
