"""Source-loading helpers for the grammar engine."""

from pathlib import Path

__all__ = [
    "detect_encoding",
    "normalize_line_endings",
    "decode_source",
    "read_source",
]


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        Detected encoding (utf-8-sig, utf-8 or latin-1).
    """
    if file_bytes.startswith(b"\xef\xbb\xbf"):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def normalize_line_endings(content: str) -> str:
    """Normalize line endings to LF.

    Parameters
    ----------
    content : str
        Text content with potentially mixed line endings.

    Returns
    -------
    str
        Text with normalized line endings (\\n only).
    """
    content = content.replace("\r\n", "\n")
    return content.replace("\r", "\n")


def decode_source(file_bytes: bytes) -> tuple[str, str]:
    """Decode raw BibTeX bytes into parser-ready text.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    tuple[str, str]
        Decoded text with LF line endings, and the encoding used.
    """
    encoding = detect_encoding(file_bytes)
    return normalize_line_endings(file_bytes.decode(encoding)), encoding


def read_source(file_path: Path) -> str:
    """Read and decode a BibTeX file.

    Parameters
    ----------
    file_path : Path
        Path to the ``.bib`` file.

    Returns
    -------
    str
        Decoded text with LF line endings.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    text, _ = decode_source(file_path.read_bytes())
    return text
