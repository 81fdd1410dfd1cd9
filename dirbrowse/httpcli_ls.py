# coding: utf-8
from __future__ import annotations

import io
import json

from .services.listing_svc import load_directory_contents
from .services.sort_svc import apply_limit, apply_sort, resolve_sort_order
from .util import Pebkac, fs_errkind, min_ex

if True:  # pylint: disable=using-constant-test
    from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from .config.scope import Config
    from .fs_util import OsHandle
    from .httpcli import Deferred, FileManager, Request, Served
    from .services.listing_svc import Listing
    from .util import NamedLogger

MIME_JSON = "application/json; charset=utf-8"
MIME_HTML = "text/html; charset=utf-8"


class HttpCliListing(object):
    fm: "FileManager"
    req: "Request"
    log: "NamedLogger"
    # provided by HttpCli
    defer: Callable[[str], "Deferred"]
    reply: Callable[..., "Served"]

    def tx_listing(self, fh: "OsHandle", bc: "Config") -> Union["Served", "Deferred"]:
        req = self.req
        try:
            ls, has_idx = load_directory_contents(
                fh, req.path, self.fm.scopes, self.fm.idx_names
            )
        except OSError as ex:
            kind = fs_errkind(ex)
            code = 403 if kind == "perm" else 410 if kind == "conflict" else 500
            raise Pebkac(code, log="readdir: %r" % (ex,))

        if has_idx and not self.fm.ignore_indexes:
            # not browsable; let the next handler serve the index
            return self.defer("has index file")

        ls.root = bc.root
        ls.req = req
        ls.url = req.url
        ls.user = bc.variables

        ls.sort, ls.order, limit = resolve_sort_order(
            req.query, bc.scope, self.fm.prefs
        )
        apply_sort(ls)
        apply_limit(ls, limit)

        if self.wants_json():
            return self.tx_json(ls)

        return self.tx_html(ls, bc)

    def wants_json(self) -> bool:
        zs = ",".join(self.req.header("accept")).lower()
        return "application/json" in zs

    def tx_json(self, ls: "Listing") -> "Served":
        try:
            zs = json.dumps([x.to_json() for x in ls.items])
        except Exception:
            self.log("json failed for %r:\n%s" % (ls.path, min_ex()), 1)
            raise Pebkac(500, "could not serialize listing")

        return self.reply(zs.encode("utf-8", "replace"), mime=MIME_JSON)

    def tx_html(self, ls: "Listing", bc: "Config") -> "Served":
        renderer = bc.template or self.fm.renderer
        buf = io.StringIO()
        try:
            renderer.render(ls, buf)
        except Exception:
            self.log("template failed for %r:\n%s" % (ls.path, min_ex()), 1)
            raise Pebkac(500, "could not render listing")

        return self.reply(buf.getvalue().encode("utf-8", "replace"), mime=MIME_HTML)
