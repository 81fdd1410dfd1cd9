# coding: utf-8
"""Sort, order and limit for directory listings."""
from __future__ import print_function, unicode_literals

import re
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from ..util import Pebkac

if TYPE_CHECKING:
    from typing import Protocol

    from .listing_svc import FileInfo, Listing

    class PrefStore(Protocol):
        def get(self, scope: str) -> dict[str, str]:
            return {}

        def put(self, scope: str, vals: dict[str, str]) -> None:
            return None


SORT_KEYS: dict[str, Callable[["FileInfo"], Any]] = {
    "name": lambda x: x.name.lower(),
    "size": lambda x: x.size,
    "time": lambda x: x.mod_time,
}

ORDERS = ("asc", "desc")

DEF_SORT = "name"
DEF_ORDER = "asc"

RE_LIMIT = re.compile(r"[0-9]+")


def _chk_sort(zs: str) -> bool:
    return zs in SORT_KEYS


def _chk_order(zs: str) -> bool:
    return zs in ORDERS


def _chk_limit(zs: str) -> bool:
    return bool(RE_LIMIT.fullmatch(zs))


PARAMS = (
    ("sort", DEF_SORT, _chk_sort, "must be one of name, size, time"),
    ("order", DEF_ORDER, _chk_order, "must be asc or desc"),
    ("limit", "0", _chk_limit, "must be a non-negative integer"),
)


def resolve_sort_order(
    query: Mapping[str, str], scope: str, prefs: Optional["PrefStore"] = None
) -> tuple[str, str, int]:
    """
    returns (sort, order, limit) for a request;

    a parameter given in the query is validated, used, and saved as
    the new default for scope; a missing one comes from prefs, else
    the default (name, asc, no limit). a bad value raises Pebkac 400
    and nothing gets saved
    """
    saved = prefs.get(scope) if prefs else {}
    upd: dict[str, str] = {}
    ret: dict[str, str] = {}
    for key, default, chk, hint in PARAMS:
        zs = query.get(key) or ""
        if zs:
            if not chk(zs):
                t = "invalid value for %s: %r; %s" % (key, zs[:64], hint)
                raise Pebkac(400, t)
            upd[key] = zs
        else:
            zs = saved.get(key) or ""
            if not zs or not chk(zs):
                zs = default

        ret[key] = zs

    if prefs and upd:
        prefs.put(scope, upd)

    return ret["sort"], ret["order"], int(ret["limit"])


def apply_sort(ls: "Listing") -> None:
    """
    sort ls.items in place by ls.sort / ls.order;
    directories are not kept ahead of files, and
    equal keys keep their original order (also when descending)
    """
    keyfun = SORT_KEYS.get(ls.sort) or SORT_KEYS[DEF_SORT]
    ls.items.sort(key=keyfun, reverse=ls.order == "desc")


def apply_limit(ls: "Listing", limit: int) -> None:
    """truncate to limit items; num_dirs / num_files stay as they were"""
    if 0 < limit <= len(ls.items):
        del ls.items[limit:]
        ls.items_limited_to = limit
    else:
        ls.items_limited_to = 0
