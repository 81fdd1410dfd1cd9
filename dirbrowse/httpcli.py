# coding: utf-8
from __future__ import print_function, unicode_literals

import stat

from .httpcli_ls import HttpCliListing
from .path_util import quotep, scope_matches
from .services.listing_svc import IDX_NAMES
from .util import Pebkac, fs_errkind, named_logger

if True:  # pylint: disable=using-constant-test
    from typing import Any, Iterable, Mapping, Optional, Union

    from .config.scope import Config
    from .util import RootLogger


class Request(object):
    """what the host transport tells us about one request"""

    def __init__(
        self,
        method: str,
        path: str,
        headers: Optional[Union[Mapping[str, str], Iterable[tuple[str, str]]]] = None,
        query: Optional[Mapping[str, str]] = None,
        url: str = "",
    ) -> None:
        self.method = method.upper()
        # decoded url path, no query
        self.path = path
        self.query = dict(query or {})
        self.url = url or quotep(path)

        self.headers: dict[str, list[str]] = {}
        if headers:
            zi = headers.items() if hasattr(headers, "items") else headers
            for k, v in zi:  # type: ignore
                self.headers.setdefault(k.lower(), []).append(v)

    def __repr__(self) -> str:
        return "Request(%s %r)" % (self.method, self.path)

    def header(self, k: str) -> list[str]:
        return self.headers.get(k.lower()) or []


class Served(object):
    """a response; the host sends it as-is"""

    def __init__(
        self, status: int, body: bytes = b"", headers: Optional[dict[str, str]] = None
    ) -> None:
        self.status = status
        self.body = body
        self.headers = headers or {}

    def __repr__(self) -> str:
        return "Served(%d, %d bytes)" % (self.status, len(self.body))


class Deferred(object):
    """not ours; the host should pass the request on to its next handler"""

    def __init__(self, reason: str = "") -> None:
        self.reason = reason

    def __repr__(self) -> str:
        return "Deferred(%r)" % (self.reason,)


class FileManager(object):
    """
    shows a listing when a directory inside one of the configured
    scopes is requested; everything else is Deferred
    """

    def __init__(
        self,
        configs: list["Config"],
        ignore_indexes: bool = False,
        idx_names: Optional[Iterable[str]] = None,
        prefs: Any = None,
        log: Optional["RootLogger"] = None,
        renderer: Any = None,
    ) -> None:
        self.configs = list(configs)
        self.ignore_indexes = ignore_indexes
        self.idx_names = tuple(IDX_NAMES if idx_names is None else idx_names)
        self.prefs = prefs
        self.log_func = log
        self._renderer = renderer

    @property
    def scopes(self) -> list[str]:
        return [x.scope for x in self.configs]

    @property
    def renderer(self) -> Any:
        if self._renderer is None:
            from .j2 import J2Renderer

            self._renderer = J2Renderer()
        return self._renderer

    def match(self, vpath: str) -> Optional["Config"]:
        """first config whose scope covers vpath"""
        for bc in self.configs:
            if scope_matches(vpath, bc.scope):
                return bc
        return None

    def serve(self, req: Request) -> Union[Served, Deferred]:
        return HttpCli(self, req).run()


class HttpCli(HttpCliListing):
    """handles one request on behalf of a FileManager"""

    def __init__(self, fm: FileManager, req: Request) -> None:
        self.fm = fm
        self.req = req
        self.log = named_logger(fm.log_func, "browse")

    def run(self) -> Union[Served, Deferred]:
        try:
            return self._run()
        except Pebkac as ex:
            zs = "%s %s: %s" % (ex.code, self.req.path, ex)
            if ex.log:
                zs += "; " + ex.log
            self.log(zs, 1 if ex.code >= 500 else 3)
            return self.reply(str(ex).encode("utf-8"), ex.code, "text/plain; charset=utf-8")

    def _run(self) -> Union[Served, Deferred]:
        req = self.req
        bc = self.fm.match(req.path)
        if not bc:
            return self.defer("no matching scope")

        # only existing directories are ours; delegate everything else
        try:
            fh = bc.root.open(req.path)
        except OSError as ex:
            kind = fs_errkind(ex)
            if kind == "perm":
                raise Pebkac(403, log=repr(ex))
            elif kind == "conflict":
                raise Pebkac(404, log=repr(ex))
            return self.defer("open: %r" % (ex,))

        with fh:
            try:
                st = fh.stat()
            except OSError as ex:
                kind = fs_errkind(ex)
                if kind == "perm":
                    raise Pebkac(403, log=repr(ex))
                elif kind == "conflict":
                    raise Pebkac(410, log=repr(ex))
                return self.defer("stat: %r" % (ex,))

            if not stat.S_ISDIR(st.st_mode):
                return self.defer("not a directory")

            # do not reply to anything else; it might be nonsensical
            if req.method in ("GET", "HEAD"):
                pass
            elif req.method in ("PROPFIND", "OPTIONS"):
                raise Pebkac(501)
            else:
                return self.defer("method " + req.method)

            # relative links in the listing need the trailing slash
            if not req.path.endswith("/"):
                return self.redirect(quotep(req.path) + "/")

            return self.tx_listing(fh, bc)

    def defer(self, reason: str) -> Deferred:
        self.log("defer %s %r: %s" % (self.req.method, self.req.path, reason), 6)
        return Deferred(reason)

    def redirect(self, dst: str, status: int = 307) -> Served:
        self.log("%d %r => %r" % (status, self.req.path, dst), 6)
        return Served(status, b"", {"Location": dst})

    def reply(self, body: bytes, status: int = 200, mime: str = "") -> Served:
        hdrs = {
            "Content-Type": mime or "text/html; charset=utf-8",
            "Content-Length": str(len(body)),
        }
        if self.req.method == "HEAD":
            body = b""
        return Served(status, body, hdrs)

