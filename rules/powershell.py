"""PowerShell rule: dot-sourced scripts and imported modules."""

import os
import re
from typing import List, Optional

from .base import DependencyRule, has_suffix


# Double-quoted, single-quoted, or bare token up to whitespace, '#' or ';'
_TOKEN = r"""(?P<path>"[^"]+"|'[^']+'|[^\s#;]+)"""

# . .\helper.ps1
# . "$PSScriptRoot\utils.ps1"
DOT_SOURCE_PATTERN = re.compile(r"^\s*\.\s+" + _TOKEN, re.MULTILINE)

# Import-Module .\MyModule.psm1
# Import-Module -Name "$PSScriptRoot\MyModule.psd1"
# using module ..\Shared\Shared.psm1
IMPORT_MODULE_PATTERN = re.compile(
    r"^\s*(?:Import-Module(?:\s+-Name)?|using\s+module)\s+" + _TOKEN,
    re.MULTILINE | re.IGNORECASE,
)

SCRIPT_ROOT_PATTERN = re.compile(r"\$\{PSScriptRoot\}|\$PSScriptRoot", re.IGNORECASE)

PATH_PREFIXES = (".\\", "..\\", "./", "../", "\\", "/")


class PowerShellDependencyRule(DependencyRule):
    """
    Dependencies of PowerShell scripts, modules and manifests.

    Only tokens that look like paths are considered, so ``Import-Module
    Pester`` (an installed module) never produces an edge. ``$PSScriptRoot``
    is the only variable that is expanded; any other variable makes the
    token unresolvable.
    """

    name = "powershell"
    suffixes = (".ps1", ".psm1", ".psd1")

    def can_handle(self, file_path: str) -> bool:
        return has_suffix(file_path, self.suffixes)

    def extract_candidates(self, content: str) -> List[str]:
        candidates = []
        for pattern in (DOT_SOURCE_PATTERN, IMPORT_MODULE_PATTERN):
            for match in pattern.finditer(content):
                token = _strip_quotes(match.group("path").strip())
                if token:
                    candidates.append(token)
        return candidates

    def resolve_candidate(self, file_path: str, candidate: str) -> Optional[str]:
        if not looks_like_path(candidate):
            return None

        base_dir = os.path.dirname(os.path.abspath(file_path))
        token = SCRIPT_ROOT_PATTERN.sub(lambda _: base_dir, candidate)

        # Any other variable cannot be resolved statically.
        if "$" in token:
            return None

        token = token.replace("\\", os.sep).replace("/", os.sep)
        if not os.path.isabs(token):
            token = os.path.join(base_dir, token)
        return os.path.abspath(token)


def looks_like_path(token: str) -> bool:
    """
    Check whether a token is a file path rather than a module name.

    Relative prefixes, absolute paths and anything containing a separator
    count as paths.
    """
    return (
        token.startswith(PATH_PREFIXES)
        or "\\" in token
        or "/" in token
        or os.path.isabs(token)
    )


def _strip_quotes(token: str) -> str:
    if len(token) >= 2 and token[0] == token[-1] and token[0] in ("'", '"'):
        token = token[1:-1]
    return token.strip()
