"""One configured browsing scope."""

from typing import Any, Optional


class Config:
    """A path prefix under which directories are listed.

    Attributes:
        scope: URL path prefix, such as "/pub"; "/" matches everything
        root: Filesystem to serve from (an OsRoot or anything with open())
        variables: Custom values handed to templates as ls.user
        template: Renderer for html listings; None uses the default one
    """

    def __init__(
        self,
        scope: str,
        root: Any,
        variables: Optional[Any] = None,
        template: Optional[Any] = None,
    ):
        self.scope = scope
        self.root = root
        self.variables = variables
        self.template = template

    def __repr__(self) -> str:
        return "Config(%r, %r)" % (self.scope, self.root)
