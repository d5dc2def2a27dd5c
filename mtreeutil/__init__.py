"""Tools for mtree manifests: vis encoding, extended attributes, attribute restoration and update ordering."""

__version__ = "0.5.1"

__all__ = ["govis", "xattr", "updatefuncs", "pathqueue", "version"]