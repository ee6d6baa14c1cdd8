"""Duplicate file discovery by content hash."""

from __future__ import annotations

import fnmatch
import hashlib
import os
import stat
import subprocess
import sys
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

_CHUNK = 1024 * 1024
DEFAULT_CONCURRENCY = 5


@dataclass
class FileInfo:
    """A file seen during a scan."""

    path: str
    size: int
    hash: str = ""
    file_type: str = ""


@dataclass
class ScanResult:
    """Outcome of a scan: groups of identical files keyed by their hash."""

    duplicate_groups: dict[str, list[str]] = field(default_factory=dict)
    total_files: int = 0
    total_size: int = 0
    saved_size: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Return the result in its serialised form."""
        return {
            "DuplicateGroups": {
                digest: list(files)
                for digest, files in sorted(self.duplicate_groups.items())
            },
            "TotalFiles": self.total_files,
            "TotalSize": self.total_size,
            "SavedSize": self.saved_size,
        }


def _visit(path: str, info: os.stat_result) -> Iterator[tuple[str, os.stat_result]]:
    yield path, info
    if stat.S_ISDIR(info.st_mode):
        for name in sorted(os.listdir(path)):
            child = os.path.join(path, name)
            yield from _visit(child, os.lstat(child))


def _walk(root: str) -> Iterator[tuple[str, os.stat_result]]:
    """Yield every path under ``root`` in lexical order, without following links."""
    yield from _visit(root, os.lstat(root))


@dataclass
class Scanner:
    """Finds files with identical content under one or more directories."""

    hash_algorithm: str = "md5"
    min_size: int = 0
    file_types: list[str] | None = None
    exclude_patterns: list[str] | None = None
    concurrency: int = DEFAULT_CONCURRENCY

    def _new_hasher(self):
        if self.hash_algorithm == "sha256":
            return hashlib.sha256()
        return hashlib.md5()

    def calculate_file_hash(self, path: str | os.PathLike[str]) -> str:
        """Return the hex digest of the file's content."""
        hasher = self._new_hasher()
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK), b""):
                hasher.update(chunk)
        return hasher.hexdigest()

    def _try_hash(self, path: str) -> str | None:
        try:
            return self.calculate_file_hash(path)
        except OSError:
            return None

    def _excluded(self, path: str) -> bool:
        name = os.path.basename(path)
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.exclude_patterns or ())

    def _candidates(self, roots: tuple[str | os.PathLike[str], ...]) -> list[FileInfo]:
        found = []
        for root in roots:
            for path, info in _walk(os.fspath(root)):
                if not stat.S_ISREG(info.st_mode) or info.st_size < self.min_size:
                    continue
                if self._excluded(path):
                    continue
                found.append(FileInfo(path=path, size=info.st_size))
        return found

    def scan(self, *args: str | os.PathLike[str]) -> ScanResult:
        """Scan the given root directories and group files by content.

        Files that cannot be read are left out; an error while walking a
        directory tree raises ``OSError``.
        """
        candidates = self._candidates(args)
        with ThreadPoolExecutor(max_workers=max(1, self.concurrency)) as pool:
            digests = list(pool.map(self._try_hash, [info.path for info in candidates]))

        by_hash: dict[str, list[FileInfo]] = {}
        for info, digest in zip(candidates, digests):
            if digest is None:
                continue
            info.hash = digest
            by_hash.setdefault(digest, []).append(info)

        result = ScanResult()
        for digest, infos in by_hash.items():
            size = infos[0].size
            count = len(infos)
            if count > 1:
                result.duplicate_groups[digest] = [info.path for info in infos]
                result.saved_size += size * (count - 1)
            result.total_files += count
            result.total_size += size * count
        return result


def move_to_trash(file_path: str | os.PathLike[str]) -> None:
    """Move a file to the system trash using the platform's own tool.

    Raises ``subprocess.CalledProcessError`` when the tool fails and
    ``OSError`` on platforms without a known trash tool.
    """
    path = os.fspath(file_path)
    if sys.platform.startswith("darwin"):
        script = f'tell app "Finder" to delete POSIX file "{path}"'
        subprocess.run(["osascript", "-e", script], check=True)
    elif sys.platform == "win32":
        script = (
            "Add-Type -AssemblyName Microsoft.VisualBasic\n"
            "[Microsoft.VisualBasic.FileIO.FileSystem]::DeleteFile("
            f"'{path}','OnlyErrorDialogs','SendToRecycleBin')"
        )
        subprocess.run(["powershell", "-Command", script], check=True)
    elif sys.platform.startswith("linux"):
        subprocess.run(["gio", "trash", path], check=True)
    else:
        raise OSError(f"moving files to the trash is not supported on {sys.platform}")