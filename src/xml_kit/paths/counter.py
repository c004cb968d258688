from collections import Counter

from .path import XmlPath


class RepetitionCounter:
    """Counts emissions per path within a single traversal.

    Keys are exact: two paths that differ only in case are counted apart.
    """

    def __init__(self) -> None:
        self._counts: Counter[XmlPath] = Counter()

    def next(self, path: XmlPath) -> int:
        """Register one more emission at ``path`` and return its 1-based ordinal."""
        self._counts[path] += 1
        return self._counts[path]

    def count(self, path: XmlPath) -> int:
        return self._counts[path]

    def reset(self) -> None:
        self._counts.clear()

    def __len__(self) -> int:
        return len(self._counts)


def suffix(label: str, ordinal: int) -> str:
    """First occurrence stays bare, the Nth (N > 1) gets ``" N"`` appended."""
    if ordinal < 1:
        raise ValueError("ordinal must be >= 1")
    if ordinal == 1:
        return label
    return f"{label} {ordinal}"
