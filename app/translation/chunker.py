DEFAULT_CHUNK_SIZE = 15000


def chunk_text(text: str, size: int = DEFAULT_CHUNK_SIZE) -> list[str]:
    """Split text into contiguous slices of at most ``size`` characters.

    ``"".join(chunk_text(text, size)) == text`` for every text and size.
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return [text[start : start + size] for start in range(0, len(text), size)]


def count_chunks(text: str, size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Number of chunks ``chunk_text`` would produce, without slicing."""
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    return -(-len(text) // size)
