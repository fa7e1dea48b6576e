"""Contract shared by all reference rules."""

import os
from abc import ABC, abstractmethod
from typing import List, Optional

from graph.model import DependencyGraph


class DependencyRule(ABC):
    """
    A recognizer for references embedded in one kind of file.

    Subclasses decide which files they handle, which raw tokens in the text
    are references and how a token maps to a path on disk. ``analyze`` ties
    those together and only ever records dependencies on existing files.
    """

    #: Short name used in log messages.
    name = "rule"

    @abstractmethod
    def can_handle(self, file_path: str) -> bool:
        """Return True if this rule applies to ``file_path`` (no I/O)."""

    @abstractmethod
    def extract_candidates(self, content: str) -> List[str]:
        """Return every raw reference token in ``content``, in order."""

    @abstractmethod
    def resolve_candidate(self, file_path: str, candidate: str) -> Optional[str]:
        """
        Map a raw token to an absolute path.

        Args:
            file_path: The file containing the reference.
            candidate: Token returned by ``extract_candidates``.

        Returns:
            Absolute path, or None if the token cannot be resolved statically.
        """

    def analyze(self, file_path: str, content: str, graph: DependencyGraph) -> int:
        """
        Record the dependencies of ``file_path`` in ``graph``.

        Candidates that do not resolve, or resolve to something that is not
        an existing regular file, are skipped silently.

        Returns:
            Number of edges added.
        """
        added = 0
        for candidate in self.extract_candidates(content):
            resolved = self.resolve_candidate(file_path, candidate)
            if resolved is None or not os.path.isfile(resolved):
                continue
            graph.add_dependency(file_path, resolved)
            added += 1
        return added

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def has_suffix(file_path: str, suffixes) -> bool:
    """Case-insensitive check of a path against a tuple of suffixes."""
    return str(file_path).lower().endswith(suffixes)
