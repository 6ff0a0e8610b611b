from app.translation.chunker import chunk_text, count_chunks
from app.translation.translator import ChunkOutcome, Translator

__all__ = ["ChunkOutcome", "Translator", "chunk_text", "count_chunks"]
