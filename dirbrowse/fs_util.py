# coding: utf-8
"""Filesystem access for dirbrowse.

Maps URL paths onto a directory on disk and enumerates directories.
Errors are plain OSErrors; callers classify them with util.fs_errkind.
"""
from __future__ import print_function, unicode_literals

import os
import stat
from typing import TYPE_CHECKING, Generator, Optional

from .__init__ import WINDOWS
from .path_util import vclean

if TYPE_CHECKING:
    from .util import RootLogger


def absreal(fpath: str) -> str:
    return os.path.abspath(os.path.realpath(fpath))


class FsEntry(object):
    """raw snapshot of one directory entry"""

    __slots__ = ("name", "size", "is_dir", "mtime", "mode")

    def __init__(self, name: str, size: int, is_dir: bool, mtime: float, mode: int):
        self.name = name
        self.size = size
        self.is_dir = is_dir
        self.mtime = mtime
        self.mode = mode

    @classmethod
    def from_stat(cls, name: str, st: os.stat_result) -> "FsEntry":
        return cls(name, st.st_size, stat.S_ISDIR(st.st_mode), st.st_mtime, st.st_mode)

    def __repr__(self) -> str:
        return "FsEntry(%r, %d, %s)" % (self.name, self.size, self.is_dir)


def statdir(
    logger: Optional["RootLogger"], lstat: bool, top: str
) -> Generator[tuple[str, os.stat_result], None, None]:
    """
    yields (name, stat) for each entry in top; symlinks are followed
    unless lstat, and a dangling one falls back to its lstat.
    failing to open top raises, failing to stat one entry is logged
    """
    src = "statdir"
    with os.scandir(top) as dh:
        for fh in dh:
            try:
                st = fh.stat(follow_symlinks=not lstat)
            except OSError as ex:
                st = None
                if lstat or not fh.is_symlink():
                    if logger:
                        logger(src, "[s] {} @ {}".format(repr(ex), fh.path), 6)
                    continue

            if st is None:
                try:
                    st = fh.stat(follow_symlinks=False)
                except OSError as ex:
                    if logger:
                        logger(src, "[s] {} @ {}".format(repr(ex), fh.path), 6)
                    continue

                if logger:
                    logger(src, "broken symlink: %r" % (fh.path,), 6)

            yield (fh.name, st)


class OsHandle(object):
    """an opened path below an OsRoot"""

    def __init__(
        self, abspath: str, fd: Optional[int], log: Optional["RootLogger"]
    ) -> None:
        self.abspath = abspath
        self.fd = fd
        self.log = log

    def stat(self) -> os.stat_result:
        if self.fd is not None:
            return os.fstat(self.fd)
        return os.stat(self.abspath)

    def readdir(self) -> list[FsEntry]:
        """all entries, in whatever order the filesystem returns them"""
        return [FsEntry.from_stat(fn, st) for fn, st in statdir(self.log, False, self.abspath)]

    def close(self) -> None:
        if self.fd is not None:
            os.close(self.fd)
            self.fd = None

    def __enter__(self) -> "OsHandle":
        return self

    def __exit__(self, *a) -> None:
        self.close()


class OsRoot(object):
    """
    serves URL paths out of one directory on disk;
    with strip, that url prefix is removed first, so base
    is the directory shown at strip rather than the site root
    """

    def __init__(
        self, base: str, log: Optional["RootLogger"] = None, strip: str = ""
    ) -> None:
        self.base = absreal(base)
        self.log = log
        self.strip = "" if strip == "/" else strip

    def __repr__(self) -> str:
        return "OsRoot(%r, %r)" % (self.base, self.strip)

    def abspath(self, vpath: str) -> str:
        """filesystem path for vpath; dot-segments cannot climb above base"""
        if self.strip and vpath.startswith(self.strip):
            vpath = vpath[len(self.strip) :]

        rem = vclean(vpath).lstrip("/")
        if not rem:
            return self.base
        return os.path.join(self.base, *rem.split("/"))

    def open(self, vpath: str) -> OsHandle:
        ap = self.abspath(vpath)
        if WINDOWS:
            # cannot os.open a directory here; stat gives the same errors
            os.stat(ap)
            return OsHandle(ap, None, self.log)

        fd = os.open(ap, os.O_RDONLY)
        return OsHandle(ap, fd, self.log)
