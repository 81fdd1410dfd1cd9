# coding: utf-8
"""Listing logic, separate from the http layer.

listing_svc assembles a Listing from a directory,
sort_svc validates sort/order/limit and applies them.
"""
from __future__ import print_function, unicode_literals
