"""Configuration parsers for dirbrowse.

Extracts and parses:
- Scope specifications (-v root:scope[:k=v,k=v])
- Template variables (k=v,k2=v2)
"""

import re
from typing import Any, Callable, Dict, List, Optional, Tuple


class VarParser:
    """Parse custom template variables."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize parser with logging function."""
        self.log = log_func

    def parse(self, txt: Optional[str]) -> Dict[str, Any]:
        """
        Parse variables in format 'key=value,key2=value2'.

        A bare key (no '=') becomes True; whitespace around
        keys and values is stripped, empty items are skipped.

        Args:
            txt: Comma-separated assignments, or None/empty

        Returns:
            Dict mapping key -> value

        Raises:
            Exception: If a key is empty
        """
        ret: Dict[str, Any] = {}
        if not txt:
            return ret

        for item in txt.split(","):
            item = item.strip()
            if not item:
                continue

            if "=" in item:
                k, v = item.split("=", 1)
                k = k.strip()
                val: Any = v.strip()
            else:
                k = item
                val = True

            if not k:
                msg = f'\n  invalid variable "{item}", must be key=value'
                raise Exception(msg)

            ret[k] = val

        return ret


class ScopeParser:
    """Parse and validate scope specifications from command-line arguments."""

    # root:scope:vars; the scope is where the first ":/" is
    RE_SCOPESPEC = re.compile(r"^(.+?):(/[^:]*)(?::(.*))?$")

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize parser with logging function."""
        self.log = log_func
        self.var_parser = VarParser(log_func)

    def parse(self, args: Optional[List[str]]) -> List[Tuple[str, str, Dict[str, Any]]]:
        """
        Parse scope arguments in format 'root:scope[:vars]'.

        Format:
        - root: directory on the server to serve files from (required)
        - scope: url path prefix, must start with '/' (required)
        - vars: custom template variables, 'key=value,key2=value2' (optional)

        Args:
            args: List of scope specs, or None/empty list

        Returns:
            List of (root, scope, vars) tuples, in the given order

        Raises:
            Exception: If any spec has invalid format
        """
        ret: List[Tuple[str, str, Dict[str, Any]]] = []

        if not args:
            return ret

        for arg in args:
            m = self.RE_SCOPESPEC.match(arg)
            if not m:
                msg = f'\n  invalid value "{arg}" for argument -v, must be root:/scope[:key=value,...]'
                raise Exception(msg)

            root, scope, zs = m.groups()
            ret.append((root, scope, self.var_parser.parse(zs)))

        return ret
