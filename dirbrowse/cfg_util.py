"""Config file handling for dirbrowse.

Pure functions for reading config files and turning them into
command-line arguments plus scope definitions.

File format:

    [global]
      p: 3923         # any long or short cli option
      ign-idx

    [/pub]            # a scope
      /srv/pub        # its root
      vars:
        title: public stuff
      flags:
        tpl: /etc/dirbrowse/pub.html

    % more.conf       # include a file, or all *.conf in a folder

Comments need at least two spaces before the #.
"""

import os
from typing import Any, Optional

from .fs_util import absreal

if True:  # pylint: disable=using-constant-test
    from .util import NamedLogger


def split_cfg_ln(ln: str) -> dict[str, Any]:
    # "a, b, c: 3" => {a:true, b:true, c:3}
    ret = {}
    while True:
        ln = ln.strip()
        if not ln:
            break
        ofs_sep = ln.find(",") + 1
        ofs_var = ln.find(":") + 1
        if not ofs_sep and not ofs_var:
            ret[ln] = True
            break
        if ofs_sep and (ofs_sep < ofs_var or not ofs_var):
            k, ln = ln.split(",", 1)
            ret[k.strip()] = True
        else:
            k, ln = ln.split(":", 1)
            ret[k.strip()] = ln.strip()
            break
    return ret


def expand_config_file(
    log: Optional["NamedLogger"], ret: list[str], fp: str, ipath: str
) -> None:
    """expand all % file includes into ret"""
    fp = absreal(fp)
    if len(ipath.split(" -> ")) > 64:
        raise Exception("hit max depth of 64 includes")

    if os.path.isdir(fp):
        names = list(sorted(os.listdir(fp)))
        cnames = [
            x for x in names if x.lower().endswith(".conf") and not x.startswith(".")
        ]
        if not cnames and log:
            t = "warning: tried to read config-files from folder '%s' but it contains no .conf files"
            log(t % (fp,), 3)

        for fn in cnames:
            fp2 = os.path.join(fp, fn)
            if fp2 in ipath:
                continue

            expand_config_file(log, ret, fp2, ipath)

        return

    if not os.path.exists(fp):
        t = "warning: tried to read config from '%s' but the file/folder does not exist"
        if log:
            log(t % (fp,), 3)
        return

    ipath += " -> " + fp
    if log:
        log("reading config file%s" % (ipath,), 6)

    with open(fp, "rb") as f:
        cfg_lines = f.read().decode("utf-8").replace("\t", " ").split("\n")

    for oln in [x.rstrip() for x in cfg_lines]:
        ln = oln.split("  #")[0].strip()
        if ln.startswith("% "):
            pad = " " * len(oln.split("%")[0])
            fp2 = ln[1:].strip()
            fp2 = os.path.join(os.path.dirname(fp), fp2)
            ofs = len(ret)
            expand_config_file(log, ret, fp2, ipath)
            for n in range(ofs, len(ret)):
                ret[n] = pad + ret[n]
            continue

        ret.append(oln)


def cfg_to_argv(gflags: dict[str, Any]) -> list[str]:
    """{"p": "80", "ign-idx": True} => ["-p", "80", "--ign-idx"]"""
    ret = []
    for k, v in gflags.items():
        ret.append(("-" if len(k) == 1 else "--") + k)
        if v is not True:
            ret.append(str(v))
    return ret


def parse_cfg(
    lines: list[str],
) -> tuple[list[str], list[tuple[str, str, dict[str, Any], dict[str, Any]]]]:
    """
    config lines (already expanded) => (argv, scopes);
    scopes are (root, scope, vars, flags) in file order
    """
    gflags: dict[str, Any] = {}
    scopes: list[tuple[str, str, dict[str, Any], dict[str, Any]]] = []
    cat = ""  # current [section]
    sub = ""  # vars: / flags: inside a scope
    root = ""
    svars: dict[str, Any] = {}
    sflags: dict[str, Any] = {}

    def flush() -> None:
        if cat.startswith("/"):
            if not root:
                raise Exception("scope [%s] has no root directory" % (cat,))
            scopes.append((root, cat, svars, sflags))

    for n, oln in enumerate(lines, 1):
        ln = oln.split("  #")[0].strip()
        if not ln or ln.startswith("#"):
            continue

        if ln.startswith("[") and ln.endswith("]"):
            flush()
            cat = ln[1:-1].strip()
            sub = root = ""
            svars = {}
            sflags = {}
            if cat != "global" and not cat.startswith("/"):
                raise Exception("line %d: unknown section [%s]" % (n, cat))
            continue

        if cat == "global":
            gflags.update(split_cfg_ln(ln))
        elif cat.startswith("/"):
            if ln in ("vars:", "flags:"):
                sub = ln[:-1]
            elif sub == "vars":
                svars.update(split_cfg_ln(ln))
            elif sub == "flags":
                sflags.update(split_cfg_ln(ln))
            elif not root:
                root = ln
            else:
                raise Exception("line %d: unexpected %r in [%s]" % (n, ln, cat))
        else:
            raise Exception("line %d: %r is outside of any [section]" % (n, ln))

    flush()
    return cfg_to_argv(gflags), scopes
