# coding: utf-8

VERSION = (1, 2, 0)
CODENAME = "sortie"
BUILD_DT = (2026, 10, 17)

S_VERSION = ".".join(map(str, VERSION))
S_BUILD_DT = "{0:04d}-{1:02d}-{2:02d}".format(*BUILD_DT)
