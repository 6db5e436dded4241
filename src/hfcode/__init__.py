"""hfcode: order-0 Huffman compressor for byte streams."""

__version__ = "1.0.0"
