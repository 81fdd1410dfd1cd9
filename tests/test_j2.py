#!/usr/bin/env python3
# coding: utf-8
from __future__ import print_function, unicode_literals

import io
import os
import shutil
import unittest

from dirbrowse.j2 import J2Renderer, crumb_url, sort_url
from dirbrowse.services.listing_svc import directory_listing
from tests import util as tu
from tests.util import ent


def mkls(path="/pub/a b/", ents=None, sort="name", order="asc"):
    ls, _ = directory_listing(ents or [], True, path)
    ls.sort = sort
    ls.order = order
    return ls


class TestHelpers(unittest.TestCase):
    def test_crumb_url(self):
        self.assertEqual(crumb_url("/"), "/")
        self.assertEqual(crumb_url("/pub"), "/pub/")
        self.assertEqual(crumb_url("/pub/a b"), "/pub/a%20b/")

    def test_sort_url_toggles_active(self):
        ls = mkls(sort="name", order="asc")
        self.assertEqual(sort_url(ls, "name"), "?sort=name&order=desc")
        self.assertEqual(sort_url(ls, "size"), "?sort=size&order=asc")

        ls = mkls(sort="name", order="desc")
        self.assertEqual(sort_url(ls, "name"), "?sort=name&order=asc")

    def test_sort_url_keeps_limit(self):
        ls = mkls()
        ls.items_limited_to = 5
        self.assertEqual(sort_url(ls, "time"), "?sort=time&order=asc&limit=5")


class TestJ2Renderer(unittest.TestCase):
    def render(self, ls, rdr=None):
        buf = io.StringIO()
        (rdr or J2Renderer()).render(ls, buf)
        return buf.getvalue()

    def test_default_template(self):
        ents = [ent("<b>.txt", 1536, mtime=0), ent("sub", 4096, True)]
        ls = mkls(ents=ents)
        ls.user = {"title": "stuff & things"}
        html = self.render(ls)

        self.assertIn("&lt;b&gt;.txt", html)
        self.assertNotIn("<b>.txt", html)
        self.assertIn('href="./%3Cb%3E.txt"', html)
        self.assertIn('href="./sub/"', html)
        self.assertIn("1.5 KiB", html)
        self.assertIn("1970-01-01 00:00:00", html)
        self.assertIn("stuff &amp; things", html)
        self.assertIn('href="/pub/a%20b/"', html)
        self.assertIn("parent directory", html)
        self.assertIn("1 directory", html)
        self.assertIn("1 file", html)

    def test_limited_note(self):
        ls = mkls(ents=[ent("a"), ent("b")])
        ls.items_limited_to = 1
        self.assertIn("showing the first 1", self.render(ls))
        ls.items_limited_to = 0
        self.assertNotIn("showing the first", self.render(ls))

    def test_no_variables(self):
        html = self.render(mkls())
        self.assertIn("<title>a b</title>", html)

    def test_mtime_fmt(self):
        ls = mkls(ents=[ent("a", mtime=0)])
        self.assertIn("01/01/1970", self.render(ls, J2Renderer(None, "%d/%m/%Y")))

    def test_custom_template(self):
        td = tu.get_ramdisk()
        try:
            fp = os.path.join(td, "mine.html")
            with open(fp, "wb") as f:
                f.write(b"{{ ls.path }}|{% for f in ls.items %}{{ f.name }};{% endfor %}")

            rdr = J2Renderer(fp)
            self.assertEqual(rdr.tpl_path, fp)
            ls = mkls(ents=[ent("x&y")])
            self.assertEqual(self.render(ls, rdr), "/pub/a b/|x&amp;y;")
        finally:
            shutil.rmtree(td)


if __name__ == "__main__":
    unittest.main()
