"""
Supported document types.

Static MIME type to label mapping, fixed at import time and read-only.
"""
from types import MappingProxyType
from typing import Mapping, Optional, FrozenSet, Tuple

UNKNOWN_LABEL = 'Unknown'

SUPPORTED_TYPES: Mapping[str, str] = MappingProxyType({
    'application/pdf': 'PDF',
    'image/jpeg': 'JPEG Image',
    'image/png': 'PNG Image',
    'application/msword': 'DOC',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document': 'DOCX',
})


class TypeRegistry:
    """
    Lookup of accepted MIME types and their display labels.

    Example:
        >>> registry = TypeRegistry()
        >>> registry.label_for('application/pdf')
        'PDF'
        >>> registry.is_supported('text/plain')
        False
    """

    def __init__(self, types: Optional[Mapping[str, str]] = None):
        """
        Initialize registry.

        Args:
            types: MIME type to label mapping (defaults to SUPPORTED_TYPES)
        """
        self._types = MappingProxyType(dict(SUPPORTED_TYPES if types is None else types))

    def is_supported(self, mime_type: str) -> bool:
        return mime_type in self._types

    def label_for(self, mime_type: str) -> str:
        return self._types.get(mime_type, UNKNOWN_LABEL)

    @property
    def mime_types(self) -> FrozenSet[str]:
        """Accepted types, as handed to the picker."""
        return frozenset(self._types)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(self._types.values())

    def __contains__(self, mime_type: object) -> bool:
        return mime_type in self._types

    def __len__(self) -> int:
        return len(self._types)


default_registry = TypeRegistry()
