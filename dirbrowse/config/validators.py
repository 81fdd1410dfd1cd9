"""Configuration validators for dirbrowse.

Validates:
- Scope roots (existence, type)
- Scope prefixes (format, duplicates)
"""

import os
from typing import Any, Callable, List, Set


class ScopeValidator:
    """Validate the list of browsing scopes."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize validator with logging function.

        Args:
            log_func: Function for logging messages (msg, level)
        """
        self.log = log_func

    def validate_roots(self, roots: List[str]) -> bool:
        """Check that every root is an existing directory.

        Args:
            roots: Filesystem paths of all scope roots

        Returns:
            True if validation passed, False otherwise (will log error)
        """
        ok = True
        for root in roots:
            if not os.path.isdir(root):
                self.log(f"scope root is not a directory: {root!r}", 1)
                ok = False

        return ok

    def validate_scopes(self, scopes: List[str]) -> bool:
        """Check that every scope is an absolute url path.

        Args:
            scopes: Scope prefixes in declaration order

        Returns:
            True if validation passed, False otherwise
        """
        ok = True
        for scope in scopes:
            if not scope.startswith("/"):
                self.log(f"scope must start with a slash: {scope!r}", 1)
                ok = False

        return ok

    def drop_duplicates(self, configs: List[Any]) -> List[Any]:
        """Remove configs whose scope was already declared.

        The first declaration always wins when matching requests,
        so a later duplicate could never be used.

        Args:
            configs: Objects with a .scope attribute, in declaration order

        Returns:
            New list without the shadowed duplicates
        """
        seen: Set[str] = set()
        ret = []
        for bc in configs:
            if bc.scope in seen:
                self.log(f"ignoring duplicate scope {bc.scope!r} ({bc!r})", 3)
                continue

            seen.add(bc.scope)
            ret.append(bc)

        return ret
