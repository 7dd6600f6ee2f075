"""Accepted file types for intake."""

from __future__ import annotations

# MIME type -> extensions, as offered to the browser drop zone.
ACCEPTED_TYPES: dict[str, list[str]] = {
    "application/pdf": [".pdf"],
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": [".docx"],
    "text/plain": [".txt"],
    "text/markdown": [".md"],
    "application/vnd.ms-excel": [".xls"],
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": [".xlsx"],
    "text/csv": [".csv"],
    "text/x-c": [".c"],
    "text/x-c++": [".cpp", ".cc", ".cxx"],
    "text/x-python": [".py"],
    "text/x-java-source": [".java"],
    "text/typescript": [".ts"],
    "text/javascript": [".js"],
    "text/html": [".html"],
    # Media: accepted by the drop zone, rejected by intake until supported.
    "audio/mpeg": [".mp3"],
    "audio/wav": [".wav"],
    "video/mp4": [".mp4"],
    "video/webm": [".webm"],
    "video/quicktime": [".mov"],
    "image/jpeg": [".jpeg", ".jpg"],
    "image/png": [".png"],
    "image/webp": [".webp"],
}

ALLOWED_EXTENSIONS: frozenset[str] = frozenset(
    ext.lstrip(".") for exts in ACCEPTED_TYPES.values() for ext in exts
)

MEDIA_PREFIXES = ("image", "audio", "video")

CSV_EXTENSIONS = frozenset({"csv"})
SPREADSHEET_EXTENSIONS = frozenset({"xlsx", "xls"})

SPREADSHEET_PLACEHOLDER = "XLSX file content - requires additional library to parse."


def extension_of(name: str) -> str:
    """Lower-cased text after the last dot ("" when there is none)."""
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def is_media_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.startswith(MEDIA_PREFIXES)


def is_allowed(name: str) -> bool:
    return extension_of(name) in ALLOWED_EXTENSIONS


def normalize_content(name: str, text: str) -> str:
    """Make decoded file text friendlier to free-text search.

    CSV rows get their separators replaced by spaces, line by line.
    Binary spreadsheets are not parsed; a placeholder stands in.
    """
    ext = extension_of(name)
    if ext in CSV_EXTENSIONS:
        return "\n".join(" ".join(line.split(",")) for line in text.split("\n"))
    if ext in SPREADSHEET_EXTENSIONS:
        return SPREADSHEET_PLACEHOLDER
    return text
