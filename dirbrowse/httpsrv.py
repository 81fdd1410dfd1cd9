# coding: utf-8
from __future__ import print_function, unicode_literals

import functools
import os
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from urllib.parse import parse_qs, unquote, urlsplit

from .__version__ import S_VERSION
from .httpcli import Deferred, Request
from .util import min_ex, named_logger

if True:  # pylint: disable=using-constant-test
    from typing import Any, Optional

    from .httpcli import FileManager
    from .util import RootLogger


class BrowseHandler(SimpleHTTPRequestHandler):
    """
    asks the FileManager first; whatever it defers is served as a
    static file (which includes index files) out of the matching
    scope's root, or the www directory when no scope matches
    """

    server_version = "dirbrowse/" + S_VERSION

    def __init__(
        self, *a: Any, fm: "FileManager", log: "RootLogger", **ka: Any
    ) -> None:
        self.fm = fm
        self.log_func = log
        super().__init__(*a, **ka)

    def log_message(self, format: str, *args: Any) -> None:
        src = "%s:%s" % self.client_address[:2]
        self.log_func(src, format % args, 6)

    def browse(self) -> bool:
        """true if the request was answered here"""
        up = urlsplit(self.path)
        query = parse_qs(up.query, keep_blank_values=True)
        req = Request(
            self.command,
            unquote(up.path),
            self.headers.items(),
            {k: v[0] for k, v in query.items()},
            up.path,
        )
        try:
            ret = self.fm.serve(req)
        except Exception:
            self.log_func("httpsrv", "unhandled error:\n" + min_ex(), 1)
            self.send_error(500)
            return True

        if isinstance(ret, Deferred):
            return False

        self.send_response(ret.status)
        for k, v in ret.headers.items():
            self.send_header(k, v)
        if "Content-Length" not in ret.headers:
            self.send_header("Content-Length", str(len(ret.body)))
        self.end_headers()
        if ret.body and self.command != "HEAD":
            self.wfile.write(ret.body)
        return True

    def do_GET(self) -> None:
        if not self.browse():
            super().do_GET()

    def do_HEAD(self) -> None:
        if not self.browse():
            super().do_HEAD()

    def do_OPTIONS(self) -> None:
        if not self.browse():
            self.send_error(405)

    def do_PROPFIND(self) -> None:
        if not self.browse():
            self.send_error(405)

    def translate_path(self, path: str) -> str:
        # deferred requests inside a scope come from that scope's root
        vpath = unquote(urlsplit(path).path)
        bc = self.fm.match(vpath)
        if bc and hasattr(bc.root, "abspath"):
            return bc.root.abspath(vpath)

        return super().translate_path(path)

    def list_directory(self, path: "os.PathLike[str] | str") -> Optional[Any]:
        # listings only come from the FileManager
        self.send_error(404)
        return None


class HttpSrv(object):
    """the reference host; one thread per connection"""

    def __init__(
        self,
        fm: "FileManager",
        www: str,
        log: "RootLogger",
        host: str = "0.0.0.0",
        port: int = 3923,
    ) -> None:
        self.fm = fm
        self.www = os.path.abspath(www)
        self.log_func = log
        self.log = named_logger(log, "httpsrv")
        self.host = host
        self.port = port
        self.srv: Optional[ThreadingHTTPServer] = None

    def bind(self) -> ThreadingHTTPServer:
        handler = functools.partial(
            BrowseHandler, fm=self.fm, log=self.log_func, directory=self.www
        )
        self.srv = ThreadingHTTPServer((self.host, self.port), handler)
        self.srv.daemon_threads = True
        self.port = self.srv.server_address[1]
        return self.srv

    def run(self) -> None:
        srv = self.srv or self.bind()
        self.log("listening on %s:%d, static files from %s" % (self.host, self.port, self.www))
        try:
            srv.serve_forever()
        finally:
            srv.server_close()

    def shutdown(self) -> None:
        if self.srv:
            self.srv.shutdown()
