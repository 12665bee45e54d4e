"""Project inspection: language counts and declared dependencies"""

import json
import os
import re
from collections import Counter
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Set, Tuple, Union


def iter_project_files(
    root: Union[str, Path],
    ignore: Iterable[str] = (),
    skip_hidden: bool = True
) -> Iterator[Path]:
    """Walk the project, skipping ignored names and (by default) hidden/temp files"""
    root = Path(root)
    ignored = set(ignore)

    for dirpath, dirs, files in os.walk(root):
        dirs[:] = [d for d in dirs if d not in ignored and not (skip_hidden and d.startswith('.'))]

        for file in files:
            if file in ignored:
                continue
            if skip_hidden and (file.startswith('.') or file.startswith('~')):
                continue
            yield Path(dirpath) / file


def language_stats(
    root: Union[str, Path],
    top_n: int = 3,
    ignore: Iterable[str] = ()
) -> List[Tuple[str, int]]:
    """
    Count project files by extension

    Args:
        root: Project directory
        top_n: Number of extensions to return
        ignore: Directory and file names to skip

    Returns:
        List of (extension, file count) pairs, most common first
    """
    counts = Counter()
    for path in iter_project_files(root, ignore):
        ext = path.suffix[1:]
        if ext:
            counts[ext] += 1

    ranked = sorted(counts.items(), key=lambda x: (-x[1], x[0]))
    return ranked[:top_n]


def _package_json_dependencies(path: Path) -> Set[str]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            pkg = json.load(f)
    except (OSError, ValueError):
        return set()

    if not isinstance(pkg, dict):
        return set()

    names = set()
    for section in ('dependencies', 'devDependencies'):
        deps = pkg.get(section) or {}
        if isinstance(deps, dict):
            names.update(deps.keys())
    return names


_REQUIREMENT_NAME = re.compile(r'^\s*([A-Za-z0-9][A-Za-z0-9._-]*)')


def _requirements_dependencies(path: Path) -> Set[str]:
    try:
        lines = path.read_text(encoding='utf-8').splitlines()
    except (OSError, UnicodeDecodeError):
        return set()

    names = set()
    for line in lines:
        line = line.split('#', 1)[0].strip()
        # Skip blanks and pip options (-r, -e, --index-url, ...)
        if not line or line.startswith('-'):
            continue
        match = _REQUIREMENT_NAME.match(line)
        if match:
            names.add(match.group(1))
    return names


def read_dependencies(root: Union[str, Path], manifests: Optional[List[str]] = None) -> List[str]:
    """
    Collect dependency names declared by the project

    Reads package.json (dependencies and devDependencies) and requirements.txt.
    Missing or malformed manifests contribute nothing.

    Returns:
        Sorted, de-duplicated dependency names
    """
    root = Path(root)
    readers = {
        'package.json': _package_json_dependencies,
        'requirements.txt': _requirements_dependencies,
    }

    names = set()
    for manifest in manifests or list(readers):
        reader = readers.get(manifest)
        if reader is None:
            continue
        names.update(reader(root / manifest))

    return sorted(names)
