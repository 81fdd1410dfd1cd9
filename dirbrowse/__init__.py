# coding: utf-8
"""Directory listing engine: scope routing, sorted listings, JSON/HTML output."""
from __future__ import print_function, unicode_literals

import os
import platform
import sys

WINDOWS = platform.system() == "Windows"
VT100 = not WINDOWS or sys.version_info >= (3, 10)
NO_COLOR = bool(os.environ.get("NO_COLOR"))

from .__version__ import S_VERSION  # noqa: E402

__version__ = S_VERSION
