#!/usr/bin/env python3
# coding: utf-8
from __future__ import print_function, unicode_literals

import errno
import os
import stat
import tempfile

from dirbrowse.fs_util import FsEntry
from dirbrowse.httpcli import Request

A_DIR = os.stat_result(
    (stat.S_IFDIR | 0o755, -1, -1, 2, 1000, 1000, 4096, 0x39230101, 0x39230101, 0x39230101)
)
A_FILE = os.stat_result(
    (stat.S_IFREG | 0o644, -1, -1, 1, 1000, 1000, 8, 0x39230101, 0x39230101, 0x39230101)
)


def get_ramdisk():
    if os.path.isdir("/dev/shm"):
        return tempfile.mkdtemp(prefix="dirbrowse-", dir="/dev/shm")
    return tempfile.mkdtemp(prefix="dirbrowse-")


def mkfile(ap, sz=0, mtime=None):
    with open(ap, "wb") as f:
        f.write(b"x" * sz)
    if mtime is not None:
        os.utime(ap, (mtime, mtime))


def ent(name, sz=0, is_dir=False, mtime=0x39230101):
    mode = (stat.S_IFDIR | 0o755) if is_dir else (stat.S_IFREG | 0o644)
    return FsEntry(name, sz, is_dir, mtime, mode)


def oserr(name):
    code = getattr(errno, name)
    return OSError(code, os.strerror(code))


def mkreq(path, method="GET", accept="", **query):
    hdrs = {"Accept": accept} if accept else {}
    return Request(method, path, hdrs, query)


class LogCollector(object):
    def __init__(self):
        self.msgs = []

    def __call__(self, src, msg, c=0):
        self.msgs.append((src, msg, c))

    def text(self):
        return "\n".join(x[1] for x in self.msgs)


class FakeHandle(object):
    def __init__(self, st=A_DIR, entries=None, stat_err=None, readdir_err=None):
        self.st = st
        self.entries = entries or []
        self.stat_err = stat_err
        self.readdir_err = readdir_err
        self.closed = False

    def stat(self):
        if self.stat_err:
            raise self.stat_err
        return self.st

    def readdir(self):
        if self.readdir_err:
            raise self.readdir_err
        return list(self.entries)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *a):
        self.close()


class FakeRoot(object):
    """open() raises open_err, or returns the handle"""

    def __init__(self, handle=None, open_err=None):
        self.handle = handle or FakeHandle()
        self.open_err = open_err
        self.opened = []

    def open(self, vpath):
        self.opened.append(vpath)
        if self.open_err:
            raise self.open_err
        return self.handle


class StrRenderer(object):
    def __init__(self, fail=False):
        self.fail = fail
        self.seen = []

    def render(self, ls, buf):
        if self.fail:
            raise ValueError("template exploded")
        self.seen.append(ls)
        buf.write("<p>%s: %s</p>" % (ls.path, ",".join(x.name for x in ls.items)))
