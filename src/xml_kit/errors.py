# src/xml_kit/errors.py

"""Exception hierarchy for xml-kit.

Transform errors are fatal to the traversal that raised them. Records already
yielded stay valid, but the document must be treated as incomplete.

Mapping errors split into two kinds: a bad row is recorded as a diagnostic
and skipped, an unreadable source always propagates to the caller.
"""


class XmlKitError(Exception):
    """Base class for all xml-kit errors."""


class TransformError(XmlKitError):
    """A traversal could not complete."""


class MalformedXML(TransformError):
    """The input does not tokenize as well-formed XML."""


class ImbalancedStructure(TransformError):
    """More closing than opening tags were observed."""


class MappingError(XmlKitError):
    """Base class for mapping table errors."""


class MappingRowError(MappingError):
    """A single mapping row has the wrong shape. Never fatal to the table."""


class MappingSourceUnavailable(MappingError):
    """The mapping source could not be read."""
