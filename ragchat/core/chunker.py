"""
Fixed-window text chunker with overlap.

Splits raw document text into overlapping character windows before embedding.
Consecutive windows share `overlap` characters so context survives chunk
boundaries during retrieval.

Dependencies: None (pure domain layer)
System role: First stage of the ingestion flow
"""

DEFAULT_CHUNK_SIZE = 800
DEFAULT_CHUNK_OVERLAP = 100


def _validate_window(max_chunk_size: int, overlap: int) -> None:
    """Reject window settings that cannot make forward progress."""
    for name, value in (("max_chunk_size", max_chunk_size), ("overlap", overlap)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer, got {type(value).__name__}")
    if max_chunk_size <= 0:
        raise ValueError(f"max_chunk_size must be positive, got {max_chunk_size}")
    if overlap < 0:
        raise ValueError(f"overlap must be non-negative, got {overlap}")
    if overlap >= max_chunk_size:
        raise ValueError(
            f"overlap ({overlap}) must be smaller than max_chunk_size ({max_chunk_size})"
        )


def chunk_spans(
    text: str,
    max_chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[tuple[int, int]]:
    """
    Compute the [start, end) offsets of every chunk window.

    Args:
        text: Raw text to split
        max_chunk_size: Maximum characters per chunk
        overlap: Characters shared by consecutive chunks

    Returns:
        list[tuple[int, int]]: Window offsets in emission order

    Raises:
        ValueError: When the window settings are invalid
    """
    _validate_window(max_chunk_size, overlap)
    if not text:
        return []

    length = len(text)
    spans: list[tuple[int, int]] = []
    start = 0
    while start < length:
        end = min(start + max_chunk_size, length)
        spans.append((start, end))
        if end == length:
            break
        start = end - overlap if end - overlap > start else end

    return spans


def chunk_text(
    text: str,
    max_chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """
    Split text into overlapping chunks of at most `max_chunk_size` characters.

    Pure function: identical input always yields the identical sequence.
    Empty text yields no chunks; otherwise every chunk is non-empty and only
    the last one may be shorter than `max_chunk_size`.

    Args:
        text: Raw text to split
        max_chunk_size: Maximum characters per chunk (default 800)
        overlap: Characters shared by consecutive chunks (default 100)

    Returns:
        list[str]: Chunks in document order

    Raises:
        ValueError: When max_chunk_size <= 0, overlap < 0 or
            overlap >= max_chunk_size
    """
    return [text[start:end] for start, end in chunk_spans(text, max_chunk_size, overlap)]
