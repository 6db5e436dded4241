"""Huffman core: frequencies, tree, code tables, bit packing.

Low-level modules. They must never import ``hfcode.cli``, ``hfcode.codec`` or
``hfcode.config`` (see tests/test_arch_boundaries.py).
"""
