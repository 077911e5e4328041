[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bmpsqueeze"
version = "0.1.0"
description = "Lossless and lossy compression of 24-bit BMP images with Huffman coding and an 8x8 DCT pipeline"
requires-python = ">=3.10"
dependencies = []
keywords = ["bmp", "compression", "huffman", "dct", "ycbcr", "image"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bmpsqueeze-compress = "bmpsqueeze.compressor:main"
bmpsqueeze-decompress = "bmpsqueeze.decompressor:main"

[tool.hatch.build.targets.wheel]
packages = ["bmpsqueeze"]

[tool.pytest.ini_options]
addopts = "-ra"
