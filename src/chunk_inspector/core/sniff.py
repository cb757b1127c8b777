"""File-extension guessing for extracted field bytes.

Declared data-format tokens win over the bytes themselves, in a fixed
precedence; byte sniffing only decides for generic ``bytes`` fields and for
tokens nothing else recognises.
"""

from __future__ import annotations

import filetype

_KEYWORD_EXTENSIONS = {
    "jpeg": "jpg",
    "jpg": "jpg",
    "pil": "png",
    "png": "png",
    "tiff": "tiff",
    "str": "txt",
    "string": "txt",
    "int": "txt",
    "float": "txt",
    "bool": "txt",
    "bytes": "bin",
    "audio": "wav",
}

_AUDIO_SUBSTRINGS = ("wav", "mp3", "flac")


def detect_magic_extension(data: bytes) -> str | None:
    """Audio containers by leading signature."""
    if len(data) >= 12 and data[0:4] == b"RIFF" and data[8:12] == b"WAVE":
        return "wav"
    if data[:3] == b"ID3":
        return "mp3"
    # MPEG audio frame sync: 11 set bits
    if len(data) >= 2 and data[0] == 0xFF and (data[1] & 0xE0) == 0xE0:
        return "mp3"
    if data[:4] == b"fLaC":
        return "flac"
    return None


def _extension_from_token(token: str) -> str | None:
    _, colon, subtype = token.partition(":")
    if colon and subtype:
        return subtype.strip().lstrip(".")
    _, dot, ext = token.rpartition(".")
    if dot and ext:
        return ext
    lowered = token.lower()
    if lowered in _KEYWORD_EXTENSIONS:
        return _KEYWORD_EXTENSIONS[lowered]
    for name in _AUDIO_SUBSTRINGS:
        if name in lowered:
            return name
    return None


def _is_text(data: bytes) -> bool:
    try:
        return bool(data.decode("utf-8").strip())
    except UnicodeDecodeError:
        return False


def guess_extension(token: str | None, data: bytes) -> str | None:
    if token is not None:
        if token.lower() in ("bytes", "bin"):
            return detect_magic_extension(data) or "bin"
        ext = _extension_from_token(token)
        if ext is not None:
            return ext

    magic = detect_magic_extension(data)
    if magic is not None:
        return magic
    if _is_text(data):
        return "txt"
    guessed: str | None = filetype.guess_extension(data)
    return guessed
