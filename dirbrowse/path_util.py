"""URL-path utilities for dirbrowse.

Handles path normalization, quoting, scope matching and breadcrumbs.
All paths here are URL paths with forward slashes, never OS paths.
"""

import posixpath
from urllib.parse import quote

# characters which may stay unescaped in a url path segment (rfc3986 pchar)
PATH_SAFE = "/$&+,:;=@"


def quotep(txt: str) -> str:
    """Percent-encode a URL path, keeping slashes.

    Args:
        txt: Decoded path

    Returns:
        Path safe for use in an href or Location header
    """
    if not txt:
        return ""
    return quote(txt, safe=PATH_SAFE)


def relurl(name: str, is_dir: bool) -> str:
    """Relative link to a directory entry.

    The "./" prefix keeps names with a colon from being parsed as a
    scheme when the link is resolved against the listing's own URL.

    Args:
        name: Entry name as found on disk
        is_dir: Whether to append a trailing slash

    Returns:
        Quoted relative URL such as "./a%20b.txt" or "./photos/"
    """
    return quotep("./" + name + ("/" if is_dir else ""))


def vclean(path: str) -> str:
    """Normalize a URL path to an absolute one without . or .. segments.

    Args:
        path: Request path, possibly relative or with dot-segments

    Returns:
        Absolute path; never climbs above "/"
    """
    ret = posixpath.normpath("/" + path)
    if ret.startswith("//"):
        ret = "/" + ret.lstrip("/")
    return ret


def vparent(path: str) -> str:
    """Parent of a path, like Go's path.Dir.

    "" and "a" yield ".", "/" and "/a" yield "/", "/a/b" yields "/a".
    """
    if not path:
        return "."

    head = path[: path.rfind("/") + 1]
    if not head:
        return "."

    ret = posixpath.normpath(head)
    if ret.startswith("//"):
        ret = "/" + ret.lstrip("/")
    return ret


def vbase(path: str) -> str:
    """Last element of a path, like Go's path.Base.

    "" yields ".", "/" yields "/", "/a/b/" yields "b".
    """
    if not path:
        return "."

    path = path.rstrip("/")
    if not path:
        return "/"

    return path.rsplit("/", 1)[-1]


def scope_matches(vpath: str, scope: str) -> bool:
    """True if vpath falls under scope; "/" and "" match everything"""
    if scope in ("/", ""):
        return True
    return vpath.startswith(scope)


def breadcrumb_map(path: str) -> dict[str, str]:
    """Map every cumulative prefix of path to its display segment.

    "/a/b/c/" gives {"/": "/", "/a": "a", "/a/b": "b", "/a/b/c": "c"};
    insertion order follows the path, so templates can iterate it.

    Args:
        path: Listing path, with or without a trailing slash

    Returns:
        Dict of prefix -> segment name; empty for an empty path
    """
    ret: dict[str, str] = {}
    if not path:
        return ret

    # skip trailing slash
    if path.endswith("/"):
        path = path[:-1]

    parts = path.split("/")
    for n, part in enumerate(parts):
        if n == 0 and not part:
            # leading slash (root)
            ret["/"] = "/"
            continue

        ret["/".join(parts[: n + 1])] = part

    return ret
