#!/usr/bin/env python3
"""
PrefixResolver: determine the default namespace of an ontology.
"""

import logging
from typing import Callable, List, Optional, Set

from .exceptions import OntologyFileError
from .source import SourceModel

logger = logging.getLogger(__name__)

# Callback that picks one URI out of the offered candidates
UriSelector = Callable[[Set[str]], str]

MISSING_PREFIX_WARNING = (
    "no default URI prefix declared: your ontology file doesn't specify the "
    "empty URI prefix. Please choose which URI to associate with this ontology."
)


def first_candidate(candidates: Set[str]) -> str:
    """Selector that deterministically picks the lexicographically first URI."""
    return sorted(candidates)[0]


def preferring(uri: Optional[str], fallback: UriSelector = first_candidate) -> UriSelector:
    """Selector that picks ``uri`` when offered, otherwise defers to ``fallback``."""
    def select(candidates: Set[str]) -> str:
        if uri is not None and uri in candidates:
            return uri
        return fallback(candidates)
    return select


class PrefixResolver:
    """Resolve the default namespace once per build.

    Args:
        source: Parsed ontology model
        select_uri: Callback asked to choose a namespace when the file
            declares no default prefix
        warnings: Build warning list the missing-prefix message is appended to
    """

    def __init__(self, source: SourceModel, select_uri: UriSelector,
                 warnings: Optional[List[str]] = None):
        self.source = source
        self.select_uri = select_uri
        self.warnings = warnings if warnings is not None else []
        self._prefix: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self._prefix is not None

    def resolve(self) -> str:
        if self._prefix is None:
            prefix = self.source.default_namespace()
            if prefix is None:
                self.warnings.append(MISSING_PREFIX_WARNING)
                candidates = self.source.namespace_uris()
                if not candidates:
                    raise OntologyFileError(
                        str(self.source.path or "<graph>"),
                        "the file declares no namespace to use as URI prefix.")
                logger.warning(f"No default URI prefix declared; "
                               f"asking for a choice among {len(candidates)} namespaces")
                prefix = self.select_uri(set(candidates))
                logger.info(f"Selected URI prefix: {prefix}")
            self._prefix = prefix
        return self._prefix
