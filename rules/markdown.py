"""Markdown rule: relative inline links between documents."""

import os
import re
from typing import List, Optional

from .base import DependencyRule, has_suffix


# Target of an inline link: [text](target)
LINK_PATTERN = re.compile(r"\]\(([^)]+)\)")


class MarkdownDependencyRule(DependencyRule):
    """
    Links from ``.md`` files to other files.

    External links (anything starting with ``http``) are ignored, as are
    in-page anchors. A ``#fragment`` after a file target is dropped before
    the target is resolved against the linking file's directory.
    """

    name = "markdown"
    suffixes = (".md",)

    def can_handle(self, file_path: str) -> bool:
        return has_suffix(file_path, self.suffixes)

    def extract_candidates(self, content: str) -> List[str]:
        return [match.group(1) for match in LINK_PATTERN.finditer(content)]

    def resolve_candidate(self, file_path: str, candidate: str) -> Optional[str]:
        link = candidate.strip()
        if link.lower().startswith("http"):
            return None

        link = link.split("#", 1)[0]
        if not link:
            return None

        directory = os.path.dirname(file_path)
        return os.path.abspath(os.path.join(directory, link))
