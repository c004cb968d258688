from .counter import RepetitionCounter, suffix
from .path import DEFAULT_SEPARATOR, XmlPath
from .tracker import PathTracker

__all__ = [
    "DEFAULT_SEPARATOR",
    "PathTracker",
    "RepetitionCounter",
    "XmlPath",
    "suffix",
]
