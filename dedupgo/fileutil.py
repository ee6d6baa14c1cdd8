"""File helpers: moving to the trash, content sniffing and size helpers."""

from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from dedupgo.sizes import format_size, parse_size

_SNIFF_LEN = 512
_WHITESPACE = b"\t\n\x0c\r "


def move_to_trash(path: str | os.PathLike[str]) -> None:
    """Move a file to the system trash.

    Raises ``subprocess.CalledProcessError`` when the platform helper fails
    and ``OSError`` when the file cannot be moved.
    """
    path = os.fspath(path)
    if sys.platform == "darwin":
        _move_to_trash_macos(path)
    elif sys.platform == "win32":
        _move_to_trash_windows(path)
    else:
        _move_to_trash_linux(path)


def _move_to_trash_macos(path: str) -> None:
    script = f'tell app "Finder" to delete POSIX file "{path}"'
    subprocess.run(["osascript", "-e", script], check=True)


def _move_to_trash_windows(path: str) -> None:
    script = (
        "Add-Type -AssemblyName Microsoft.VisualBasic\n"
        "[Microsoft.VisualBasic.FileIO.FileSystem]::DeleteFile("
        f"'{path}', 'OnlyErrorDialogs', 'SendToRecycleBin')"
    )
    subprocess.run(["powershell", "-Command", script], check=True)


def _extension(name: str) -> str:
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _move_to_trash_linux(path: str) -> None:
    trash_dir = Path.home() / ".local" / "share" / "Trash" / "files"
    trash_dir.mkdir(mode=0o755, parents=True, exist_ok=True)

    file_name = os.path.basename(path)
    ext = _extension(file_name)
    stem = file_name[: len(file_name) - len(ext)]
    target = trash_dir / file_name
    counter = 1
    while target.exists():
        target = trash_dir / f"{stem}_{counter}{ext}"
        counter += 1
    os.rename(path, target)


def get_file_type(path: str | os.PathLike[str]) -> str:
    """Classify a file by its leading bytes.

    Returns one of ``image``, ``video``, ``audio``, ``text``, ``pdf``,
    ``archive`` or ``other``. Raises ``EOFError`` for an empty file.
    """
    with open(path, "rb") as handle:
        head = handle.read(_SNIFF_LEN)
    if not head:
        raise EOFError(f"empty file: {os.fspath(path)}")
    # The sniffer always sees a full, zero-padded buffer.
    mime = detect_content_type(head.ljust(_SNIFF_LEN, b"\x00"))

    if mime.startswith("image/"):
        return "image"
    if mime.startswith("video/"):
        return "video"
    if mime.startswith("audio/"):
        return "audio"
    if mime.startswith("text/"):
        return "text"
    if mime.startswith("application/pdf"):
        return "pdf"
    if mime.startswith(("application/zip", "application/x-rar", "application/x-7z")):
        return "archive"
    return "other"


def _first_non_ws(data: bytes) -> int:
    index = 0
    while index < len(data) and data[index] in _WHITESPACE:
        index += 1
    return index


def _exact(pattern: bytes, mime: str):
    def match(data: bytes, start: int) -> str | None:
        return mime if data.startswith(pattern) else None

    return match


def _masked(mask: bytes, pattern: bytes, mime: str, skip_ws: bool = False):
    def match(data: bytes, start: int) -> str | None:
        if skip_ws:
            data = data[start:]
        if len(data) < len(pattern):
            return None
        if all((d & m) == p for d, m, p in zip(data, mask, pattern)):
            return mime
        return None

    return match


def _html(tag: bytes):
    def match(data: bytes, start: int) -> str | None:
        data = data[start:]
        if len(data) < len(tag) + 1:
            return None
        for have, want in zip(data, tag):
            if 0x41 <= want <= 0x5A:
                have &= 0xDF
            if have != want:
                return None
        if data[len(tag)] not in b" >":
            return None
        return "text/html; charset=utf-8"

    return match


def _mp4(data: bytes, start: int) -> str | None:
    if len(data) < 12:
        return None
    box_size = int.from_bytes(data[:4], "big")
    if len(data) < box_size or box_size % 4 != 0:
        return None
    if data[4:8] != b"ftyp":
        return None
    for offset in range(8, box_size, 4):
        if offset == 12:
            continue
        if data[offset : offset + 3] == b"mp4":
            return "video/mp4"
    return None


def _text(data: bytes, start: int) -> str | None:
    for byte in data[start:]:
        if (
            byte <= 0x08
            or byte == 0x0B
            or 0x0E <= byte <= 0x1A
            or 0x1C <= byte <= 0x1F
        ):
            return None
    return "text/plain; charset=utf-8"


_FF4 = b"\xff\xff\xff\xff"
_RIFF_MASK = _FF4 + b"\x00\x00\x00\x00" + _FF4

_SIGNATURES = (
    *(
        _html(tag)
        for tag in (
            b"<!DOCTYPE HTML", b"<HTML", b"<HEAD", b"<SCRIPT", b"<IFRAME",
            b"<H1", b"<DIV", b"<FONT", b"<TABLE", b"<A", b"<STYLE",
            b"<TITLE", b"<B", b"<BODY", b"<BR", b"<P", b"<!--",
        )
    ),
    _masked(b"\xff" * 5, b"<?xml", "text/xml; charset=utf-8", skip_ws=True),
    _exact(b"%PDF-", "application/pdf"),
    _exact(b"%!PS-Adobe-", "application/postscript"),
    _masked(b"\xff\xff\x00\x00", b"\xfe\xff\x00\x00", "text/plain; charset=utf-16be"),
    _masked(b"\xff\xff\x00\x00", b"\xff\xfe\x00\x00", "text/plain; charset=utf-16le"),
    _masked(b"\xff\xff\xff\x00", b"\xef\xbb\xbf\x00", "text/plain; charset=utf-8"),
    _exact(b"\x00\x00\x01\x00", "image/x-icon"),
    _exact(b"\x00\x00\x02\x00", "image/x-icon"),
    _exact(b"BM", "image/bmp"),
    _exact(b"GIF87a", "image/gif"),
    _exact(b"GIF89a", "image/gif"),
    _masked(_RIFF_MASK + b"\xff\xff", b"RIFF\x00\x00\x00\x00WEBPVP", "image/webp"),
    _exact(b"\x89PNG\x0d\x0a\x1a\x0a", "image/png"),
    _exact(b"\xff\xd8\xff", "image/jpeg"),
    _masked(_FF4, b".snd", "audio/basic"),
    _masked(_RIFF_MASK, b"FORM\x00\x00\x00\x00AIFF", "audio/aiff"),
    _masked(b"\xff\xff\xff", b"ID3", "audio/mpeg"),
    _masked(b"\xff" * 5, b"OggS\x00", "application/ogg"),
    _masked(b"\xff" * 8, b"MThd\x00\x00\x00\x06", "audio/midi"),
    _masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00AVI ", "video/avi"),
    _masked(_RIFF_MASK, b"RIFF\x00\x00\x00\x00WAVE", "audio/wave"),
    _mp4,
    _exact(b"\x1a\x45\xdf\xa3", "video/webm"),
    _masked(b"\x00" * 34 + b"\xff\xff", b"\x00" * 34 + b"LP", "application/vnd.ms-fontobject"),
    _exact(b"\x00\x01\x00\x00", "font/ttf"),
    _exact(b"OTTO", "font/otf"),
    _exact(b"ttcf", "font/collection"),
    _exact(b"wOFF", "font/woff"),
    _exact(b"wOF2", "font/woff2"),
    _exact(b"\x1f\x8b\x08", "application/x-gzip"),
    _exact(b"PK\x03\x04", "application/zip"),
    _exact(b"Rar!\x1a\x07\x00", "application/x-rar-compressed"),
    _exact(b"Rar!\x1a\x07\x01\x00", "application/x-rar-compressed"),
    _exact(b"\x00asm", "application/wasm"),
    _text,
)


def detect_content_type(data: bytes) -> str:
    """Guess a MIME type from at most the first 512 bytes of ``data``.

    Falls back to ``application/octet-stream``.
    """
    data = bytes(data[:_SNIFF_LEN])
    start = _first_non_ws(data)
    for signature in _SIGNATURES:
        mime = signature(data, start)
        if mime is not None:
            return mime
    return "application/octet-stream"


def format_file_size(size: int) -> str:
    """Format a byte count for display, e.g. ``"1.0 MB"``."""
    return format_size(size)


def parse_file_size(size_str: str) -> int:
    """Parse a size string such as ``"10MB"`` into bytes."""
    return parse_size(size_str)