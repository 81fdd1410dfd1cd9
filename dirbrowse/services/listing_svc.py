# coding: utf-8
"""Directory listing model and assembly."""
from __future__ import print_function, unicode_literals

from datetime import datetime
from typing import TYPE_CHECKING, Any, Iterable, Optional

from ..path_util import breadcrumb_map, relurl, vbase, vparent
from ..time_util import DEF_MTIME_FMT, fmt_mtime, humansize, iso8601, ts2dt

if TYPE_CHECKING:
    from ..fs_util import FsEntry, OsHandle

# names which make a directory an index document rather than a listing
IDX_NAMES = (
    "index.html",
    "index.htm",
    "index.txt",
    "default.html",
    "default.htm",
    "default.txt",
)


class FileInfo(object):
    """read-only info about one file or directory in a listing"""

    __slots__ = ("is_dir", "name", "size", "url", "mod_time", "mode")

    def __init__(
        self,
        is_dir: bool,
        name: str,
        size: int,
        url: str,
        mod_time: datetime,
        mode: int,
    ) -> None:
        zt = (is_dir, name, max(0, size), url, mod_time, mode)
        for k, v in zip(self.__slots__, zt):
            object.__setattr__(self, k, v)

    def __setattr__(self, k: str, v: Any) -> None:
        raise AttributeError("FileInfo is read-only")

    def __repr__(self) -> str:
        return "FileInfo(%r, dir=%s, sz=%d)" % (self.name, self.is_dir, self.size)

    @classmethod
    def from_entry(cls, ent: "FsEntry") -> "FileInfo":
        return cls(
            ent.is_dir,
            ent.name,
            ent.size,
            relurl(ent.name, ent.is_dir),
            ts2dt(ent.mtime),
            ent.mode,
        )

    def human_size(self) -> str:
        """size in IEC units, 1536 => 1.5 KiB"""
        return humansize(self.size)

    def human_mod_time(self, fmt: str = DEF_MTIME_FMT) -> str:
        return fmt_mtime(self.mod_time, fmt)

    def to_json(self) -> dict[str, Any]:
        return {
            "IsDir": self.is_dir,
            "Name": self.name,
            "Size": self.size,
            "URL": self.url,
            "ModTime": iso8601(self.mod_time),
            "Mode": self.mode,
        }


class Listing(object):
    """everything a template needs to show one directory"""

    def __init__(
        self,
        name: str,
        path: str,
        can_go_up: bool,
        items: list[FileInfo],
        num_dirs: int,
        num_files: int,
    ) -> None:
        # last element of the path
        self.name = name
        # full path of the request
        self.path = path
        # whether the parent directory is browsable
        self.can_go_up = can_go_up
        self.items = items
        # counts describe the whole directory, also after limiting
        self.num_dirs = num_dirs
        self.num_files = num_files
        self.sort = ""
        self.order = ""
        # nonzero if items were truncated to this many
        self.items_limited_to = 0
        # custom variables from the scope config
        self.user: Any = None
        # request context, for templates
        self.root: Any = None
        self.url = ""
        self.req: Any = None

    def __repr__(self) -> str:
        return "Listing(%r, %d dirs, %d files)" % (
            self.path,
            self.num_dirs,
            self.num_files,
        )

    def breadcrumb_map(self) -> dict[str, str]:
        return breadcrumb_map(self.path)


def directory_listing(
    entries: Iterable["FsEntry"],
    can_go_up: bool,
    url_path: str,
    idx_names: Iterable[str] = IDX_NAMES,
) -> tuple[Listing, bool]:
    """
    build a Listing from raw entries, keeping their order;
    also returns whether any entry is an index document
    """
    idx = set(idx_names)
    items = []
    ndirs = nfiles = 0
    has_idx = False
    for ent in entries:
        if ent.name in idx:
            has_idx = True

        if ent.is_dir:
            ndirs += 1
        else:
            nfiles += 1

        items.append(FileInfo.from_entry(ent))

    ls = Listing(vbase(url_path), url_path, can_go_up, items, ndirs, nfiles)
    return ls, has_idx


def can_go_up(url_path: str, scopes: Iterable[str]) -> bool:
    """true if the parent of url_path is inside any of the scopes"""
    zs = url_path[:-1] if url_path.endswith("/") else url_path
    parent = vparent(zs)
    return any(parent.startswith(scope) for scope in scopes)


def load_directory_contents(
    fh: "OsHandle",
    url_path: str,
    scopes: Iterable[str],
    idx_names: Optional[Iterable[str]] = None,
) -> tuple[Listing, bool]:
    """
    read the opened directory and assemble its listing;
    OSErrors from reading the directory are not caught here
    """
    entries = fh.readdir()
    up = can_go_up(url_path, scopes)
    if idx_names is None:
        idx_names = IDX_NAMES
    return directory_listing(entries, up, url_path, idx_names)
