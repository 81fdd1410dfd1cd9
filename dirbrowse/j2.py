# coding: utf-8
"""jinja2 templates for html listings."""
from __future__ import print_function, unicode_literals

import os

import jinja2

from .path_util import quotep
from .time_util import DEF_MTIME_FMT

if True:  # pylint: disable=using-constant-test
    from typing import IO, Any, Optional

    from .services.listing_svc import Listing

TPL_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "web")
TPL_DEF = "browse.html"


def crumb_url(prefix: str) -> str:
    if prefix == "/":
        return "/"
    return quotep(prefix) + "/"


def sort_url(ls: "Listing", key: str) -> str:
    """link which sorts by key; clicking the active key flips the order"""
    order = "desc" if ls.sort == key and ls.order == "asc" else "asc"
    ret = "?sort=%s&order=%s" % (key, order)
    if ls.items_limited_to:
        ret += "&limit=%d" % (ls.items_limited_to,)
    return ret


class J2Renderer(object):
    """
    renders a Listing with a jinja2 template; the packaged
    browse.html unless tpl_path points at another file
    """

    def __init__(
        self, tpl_path: Optional[str] = None, mtime_fmt: str = DEF_MTIME_FMT
    ) -> None:
        if tpl_path:
            tdir, tname = os.path.split(os.path.abspath(tpl_path))
        else:
            tdir, tname = TPL_DIR, TPL_DEF

        self.tpl_path = os.path.join(tdir, tname)
        self.mtime_fmt = mtime_fmt

        j2env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(tdir),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        j2env.filters["quotep"] = quotep
        self.tpl = j2env.get_template(tname)

    def __repr__(self) -> str:
        return "J2Renderer(%r)" % (self.tpl_path,)

    def render(self, ls: "Listing", buf: IO[str], **ka: Any) -> None:
        crumbs = [(crumb_url(k), v) for k, v in ls.breadcrumb_map().items()]
        ka["ls"] = ls
        ka["crumbs"] = crumbs
        ka["sort_url"] = lambda key: sort_url(ls, key)
        ka["mtime_fmt"] = self.mtime_fmt
        buf.write(self.tpl.render(**ka))
