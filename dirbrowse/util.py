# coding: utf-8
from __future__ import print_function, unicode_literals

import errno
import os
import sys
import threading
import time
import traceback
from datetime import timezone

from .__init__ import NO_COLOR, VT100

if True:  # pylint: disable=using-constant-test
    from typing import IO, Optional, Protocol, Union

    class RootLogger(Protocol):
        def __call__(self, src: str, msg: str, c: Union[int, str] = 0) -> None:
            return None

    class NamedLogger(Protocol):
        def __call__(self, msg: str, c: Union[int, str] = 0) -> None:
            return None


UTC = timezone.utc

HTTPCODE = {
    200: "OK",
    204: "No Content",
    301: "Moved Permanently",
    302: "Found",
    304: "Not Modified",
    307: "Temporary Redirect",
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    410: "Gone",
    500: "Internal Server Error",
    501: "Not Implemented",
    503: "Service Unavailable",
    999: "MissingNo",
}


def noop(*a, **ka):
    pass


def _ens(want: str) -> tuple[int, ...]:
    ret: list[int] = []
    for v in want.split():
        try:
            ret.append(getattr(errno, v))
        except AttributeError:
            pass

    return tuple(ret)


# permission-denied class
E_FS_PERM = _ens("EPERM EACCES ENOTCAPABLE")
# path exists but is not what we expected
E_FS_CONFLICT = _ens("EEXIST ENOTEMPTY ENOTDIR")


def fs_errkind(ex: BaseException) -> str:
    """classify a filesystem error; "perm", "conflict" or "" (anything else)"""
    if isinstance(ex, PermissionError):
        return "perm"

    zi = getattr(ex, "errno", None)
    if zi in E_FS_PERM:
        return "perm"
    if zi in E_FS_CONFLICT:
        return "conflict"
    return ""


class Pebkac(Exception):
    def __init__(
        self, code: int, msg: Optional[str] = None, log: Optional[str] = None
    ) -> None:
        super(Pebkac, self).__init__(msg or HTTPCODE[code])
        self.code = code
        self.log = log

    def __repr__(self) -> str:
        return "Pebkac({}, {})".format(self.code, repr(self.args))


def min_ex(max_lines: int = 8, reverse: bool = False) -> str:
    et, ev, tb = sys.exc_info()
    stb = traceback.extract_tb(tb) if tb else traceback.extract_stack()[:-1]
    fmt = "%s:%d <%s>: %s"
    ex = [fmt % (fp.split(os.sep)[-1], ln, fun, txt) for fp, ln, fun, txt in stb]
    if et or ev or tb:
        ex.append("[%s] %s" % (et.__name__ if et else "(anonymous)", ev))
    return "\n".join(ex[-max_lines:][:: -1 if reverse else 1])


class RootLog(object):
    """
    the root logger; components get a (src, msg, c) callable,
    c is a colour: 1=error 3=warning 6=debug 0=info,
    or a raw ansi sequence like "90"
    """

    def __init__(
        self, quiet: bool = False, verbose: bool = False, fo: Optional[IO[str]] = None
    ) -> None:
        self.quiet = quiet
        self.verbose = verbose
        self.fo = fo or sys.stderr
        self.colors = VT100 and not NO_COLOR and self.fo.isatty()
        self.mutex = threading.Lock()

    def __call__(self, src: str, msg: str, c: Union[int, str] = 0) -> None:
        if self.quiet:
            return

        if c == 6 and not self.verbose:
            return

        now = time.time()
        ts = time.strftime("%H:%M:%S", time.localtime(now))
        ts += ".%03d" % (int(now * 1000) % 1000,)
        if not self.colors:
            line = "%s %-21s %s\n" % (ts, src, msg)
        else:
            if not c:
                cs = ""
            elif isinstance(c, int):
                cs = "\033[3%dm" % (c,)
            else:
                cs = "\033[%sm" % (c,)

            fmt = "\033[36m%s \033[33m%-21s \033[0m%s%s\033[0m\n"
            line = fmt % (ts, src, cs, msg)

        with self.mutex:
            self.fo.write(line)
            self.fo.flush()


def named_logger(log: Optional["RootLogger"], src: str) -> "NamedLogger":
    if not log:
        return noop

    def _log(msg: str, c: Union[int, str] = 0) -> None:
        log(src, msg, c)

    return _log
