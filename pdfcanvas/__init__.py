"""Building blocks for writing PDF documents: object encoding, streams, content streams, paths and arcs."""

__version__ = "0.1.0"