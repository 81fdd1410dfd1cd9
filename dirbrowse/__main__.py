#!/usr/bin/env python3
# coding: utf-8
"""
dirbrowse: sortable directory listings over http,
as html or json (send Accept: application/json)
"""
from __future__ import print_function, unicode_literals

import argparse
import sys

from .__version__ import S_BUILD_DT, S_VERSION
from .cfg_util import expand_config_file, parse_cfg
from .config import Config, ScopeParser, ScopeValidator
from .db import HAVE_SQLITE3
from .db.prefs_repo import MemPrefs, PrefsRepository
from .fs_util import OsRoot
from .httpcli import FileManager
from .httpsrv import HttpSrv
from .j2 import J2Renderer
from .services.listing_svc import IDX_NAMES
from .time_util import DEF_MTIME_FMT
from .util import RootLog, named_logger

if True:  # pylint: disable=using-constant-test
    from typing import Any, Optional

    from .util import RootLogger

SCOPE_FLAGS = ("tpl",)


def make_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="dirbrowse",
        description="dirbrowse v%s (%s)" % (S_VERSION, S_BUILD_DT),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="example:\n  dirbrowse -v /srv/pub:/pub:title=stuff -v /srv/pub:/docs",
    )
    ap.add_argument("-c", metavar="PATH", action="append", help="read config file (or folder of *.conf); can be repeated")
    ap.add_argument("-i", metavar="IP", default="0.0.0.0", help="ip to listen on")
    ap.add_argument("-p", metavar="PORT", type=int, default=3923, help="port to listen on")
    ap.add_argument("-v", metavar="ROOT:SCOPE[:VARS]", action="append", help="list directories of ROOT below url SCOPE; VARS is key=value,... for the template; can be repeated, first match wins")
    ap.add_argument("-q", action="store_true", help="quiet")
    ap.add_argument("--dbg", action="store_true", help="also show debug messages (deferrals, redirects)")
    ap.add_argument("--www", metavar="PATH", default="", help="static files for requests outside every scope come from PATH; default is the root of the first scope (deferred requests inside a scope come from its own root)")
    ap.add_argument("--ign-idx", action="store_true", help="list directories even if they contain an index file")
    ap.add_argument("--idx", metavar="NAMES", default=",".join(IDX_NAMES), help="comma-separated index filenames (default: %(default)s)")
    ap.add_argument("--tpl", metavar="PATH", default="", help="jinja2 template for html listings; default is the built-in one")
    ap.add_argument("--mtime-fmt", metavar="FMT", default=DEF_MTIME_FMT, help="strftime format for modification times")
    ap.add_argument("--prefs-db", metavar="PATH", default="", help="remember sort preferences in this sqlite file; default is in memory only")
    ap.add_argument("--version", action="version", version="dirbrowse " + S_VERSION)
    return ap


def build_configs(
    al: argparse.Namespace,
    specs: list[tuple[str, str, dict[str, Any], dict[str, Any]]],
    log: "RootLogger",
) -> list[Config]:
    nlog = named_logger(log, "cfg")
    tpls: dict[str, J2Renderer] = {}

    def renderer(tpl: str) -> J2Renderer:
        if tpl not in tpls:
            tpls[tpl] = J2Renderer(tpl or None, al.mtime_fmt)
        return tpls[tpl]

    ret = []
    for root, scope, svars, sflags in specs:
        for k in sflags:
            if k not in SCOPE_FLAGS:
                nlog("unknown flag %r for scope %s" % (k, scope), 3)

        tpl = str(sflags.get("tpl") or al.tpl or "")
        # root is the folder shown at scope
        bc = Config(scope, OsRoot(root, log, scope), svars or None, renderer(tpl))
        ret.append(bc)

    return ret


def load(argv: list[str], log: "RootLogger") -> tuple[argparse.Namespace, list[Config]]:
    ap = make_argparser()
    al = ap.parse_args(argv)
    nlog = named_logger(log, "cfg")

    specs: list[tuple[str, str, dict[str, Any], dict[str, Any]]] = []
    if al.c:
        lines: list[str] = []
        for fp in al.c:
            expand_config_file(nlog, lines, fp, "")

        cargv, specs = parse_cfg(lines)
        # the actual command line wins over config files
        al = ap.parse_args(cargv + argv)

    cli_specs = [(a, b, c, {}) for a, b, c in ScopeParser(nlog).parse(al.v)]
    specs = cli_specs + specs
    if not specs:
        nlog("no scopes given; listing the current folder at /", 3)
        specs = [(".", "/", {}, {})]

    val = ScopeValidator(nlog)
    if not val.validate_scopes([x[1] for x in specs]):
        raise Exception("invalid scope config")

    if not val.validate_roots([x[0] for x in specs]):
        raise Exception("invalid scope config")

    configs = val.drop_duplicates(build_configs(al, specs, log))
    return al, configs


def main(argv: Optional[list[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    pre = [x for x in argv if x in ("-q", "--dbg")]
    log = RootLog(quiet="-q" in pre, verbose="--dbg" in pre)
    try:
        al, configs = load(argv, log)
    except Exception as ex:
        log("cfg", "\033[31mfailed to load config:\033[0m %s" % (ex,), 1)
        return 1

    for bc in configs:
        log("cfg", "scope %s => %s" % (bc.scope, bc.root.base))

    if al.prefs_db:
        if not HAVE_SQLITE3:
            log("cfg", "sqlite3 is unavailable; cannot use --prefs-db", 1)
            return 1
        prefs: Any = PrefsRepository(al.prefs_db)
    else:
        prefs = MemPrefs()

    idx = [x.strip() for x in al.idx.split(",") if x.strip()]
    fm = FileManager(configs, al.ign_idx, idx, prefs, log)
    www = al.www or configs[0].root.base
    srv = HttpSrv(fm, www, log, al.i, al.p)
    try:
        srv.run()
    except KeyboardInterrupt:
        log("httpsrv", "ok bye")
    finally:
        prefs.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
