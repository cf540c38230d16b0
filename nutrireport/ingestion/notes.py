from collections.abc import Sequence


def split_notes(raw_notes: str) -> list[str]:
    """Split comma-separated free text into trimmed, non-empty notes."""
    pieces = (piece.strip() for piece in raw_notes.split(","))
    return [piece for piece in pieces if piece]


def merge_notes(existing: Sequence[str], raw_notes: str) -> list[str]:
    """Append notes from `raw_notes` that are not already in `existing`.

    Existing entries are kept as they are, in order. New pieces are compared
    on their trimmed text and added in input order, first occurrence only.
    Merging the same input twice yields the same result.
    """
    merged = list(existing)
    seen = {note.strip() for note in existing}
    for note in split_notes(raw_notes):
        if note in seen:
            continue
        seen.add(note)
        merged.append(note)
    return merged
