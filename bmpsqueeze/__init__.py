"""Lossless and lossy compression of 24-bit BMP images with Huffman coding."""

__version__ = "0.1.0"
__all__ = ["__version__"]