"""Infrastructure Layer.

Adapters that perform I/O (filesystem, HTTP, archive decoding) on behalf of
the domain ports.
"""
