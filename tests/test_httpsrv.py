#!/usr/bin/env python3
# coding: utf-8
from __future__ import print_function, unicode_literals

import json
import os
import shutil
import threading
import unittest
from urllib.error import HTTPError
from urllib.request import Request as UrlReq
from urllib.request import urlopen

from dirbrowse.__main__ import load
from dirbrowse.config import Config
from dirbrowse.db.prefs_repo import MemPrefs
from dirbrowse.fs_util import OsRoot
from dirbrowse.httpcli import FileManager
from dirbrowse.httpsrv import HttpSrv
from tests import util as tu
from tests.util import LogCollector


class TestHttpSrv(unittest.TestCase):
    def setUp(self):
        self.td = tu.get_ramdisk()
        os.makedirs(os.path.join(self.td, "pub", "sub"))
        os.mkdir(os.path.join(self.td, "site"))
        tu.mkfile(os.path.join(self.td, "pub", "a.txt"), 4)
        with open(os.path.join(self.td, "site", "index.html"), "wb") as f:
            f.write(b"<h1>hi</h1>")

        root = OsRoot(self.td)
        fm = FileManager([Config("/", root)], prefs=MemPrefs())
        self.srv = HttpSrv(fm, self.td, LogCollector(), "127.0.0.1", 0)
        self.srv.bind()
        self.th = threading.Thread(target=self.srv.run, daemon=True)
        self.th.start()

    def tearDown(self):
        self.srv.shutdown()
        self.th.join(5)
        shutil.rmtree(self.td)

    def get(self, path, accept="", method="GET"):
        url = "http://127.0.0.1:%d%s" % (self.srv.port, path)
        req = UrlReq(url, method=method)
        if accept:
            req.add_header("Accept", accept)
        with urlopen(req, timeout=5) as r:
            return r.status, dict(r.headers), r.read()

    def test_port_assigned(self):
        self.assertNotEqual(self.srv.port, 0)

    def test_json(self):
        st, hdrs, body = self.get("/pub/?sort=name", "application/json")
        self.assertEqual(st, 200)
        self.assertTrue(hdrs["Content-Type"].startswith("application/json"))
        items = json.loads(body.decode("utf-8"))
        self.assertEqual([x["Name"] for x in items], ["a.txt", "sub"])

    def test_html(self):
        st, _, body = self.get("/pub/")
        self.assertEqual(st, 200)
        self.assertIn(b'href="./sub/"', body)

    def test_redirect(self):
        # urllib follows the 307
        st, _, body = self.get("/pub", "application/json")
        self.assertEqual(st, 200)
        self.assertEqual(len(json.loads(body.decode("utf-8"))), 2)

    def test_index_served_statically(self):
        st, _, body = self.get("/site/")
        self.assertEqual(st, 200)
        self.assertEqual(body, b"<h1>hi</h1>")

    def test_file_served_statically(self):
        st, _, body = self.get("/pub/a.txt")
        self.assertEqual(st, 200)
        self.assertEqual(body, b"xxxx")

    def test_bad_sort(self):
        with self.assertRaises(HTTPError) as cm:
            self.get("/pub/?sort=bogus")
        self.assertEqual(cm.exception.code, 400)
        cm.exception.close()

    def test_head(self):
        st, hdrs, body = self.get("/pub/", method="HEAD")
        self.assertEqual(st, 200)
        self.assertEqual(body, b"")
        self.assertNotEqual(hdrs["Content-Length"], "0")

    def test_post_deferred(self):
        with self.assertRaises(HTTPError) as cm:
            self.get("/pub/", method="POST")
        self.assertEqual(cm.exception.code, 501)
        cm.exception.close()


class TestHttpSrvScopes(unittest.TestCase):
    """two scopes with their own roots, built like the command line does"""

    def setUp(self):
        self.td = tu.get_ramdisk()
        self.a = os.path.join(self.td, "a")
        self.b = os.path.join(self.td, "b")
        os.mkdir(self.a)
        os.mkdir(self.b)
        tu.mkfile(os.path.join(self.a, "x.txt"), 2)
        with open(os.path.join(self.b, "index.html"), "wb") as f:
            f.write(b"<h1>b</h1>")

        _, configs = load(["-v", self.a + ":/a", "-v", self.b + ":/b"], LogCollector())
        fm = FileManager(configs)
        self.srv = HttpSrv(fm, configs[0].root.base, LogCollector(), "127.0.0.1", 0)
        self.srv.bind()
        self.th = threading.Thread(target=self.srv.run, daemon=True)
        self.th.start()

    def tearDown(self):
        self.srv.shutdown()
        self.th.join(5)
        shutil.rmtree(self.td)

    def get(self, path, accept=""):
        req = UrlReq("http://127.0.0.1:%d%s" % (self.srv.port, path))
        if accept:
            req.add_header("Accept", accept)
        with urlopen(req, timeout=5) as r:
            return r.status, r.read()

    def test_listing(self):
        st, body = self.get("/a/", "application/json")
        self.assertEqual(st, 200)
        self.assertEqual([x["Name"] for x in json.loads(body.decode("utf-8"))], ["x.txt"])

    def test_index_from_own_root(self):
        self.assertEqual(self.get("/b/"), (200, b"<h1>b</h1>"))
        self.assertEqual(self.get("/b/index.html"), (200, b"<h1>b</h1>"))

    def test_file_from_own_root(self):
        self.assertEqual(self.get("/a/x.txt"), (200, b"xx"))


if __name__ == "__main__":
    unittest.main()
