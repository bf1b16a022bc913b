# -*- coding: utf-8 -*-
"""
Python implementation of a tile-merging puzzle game in the style of 2048.
"""
