"""File enumeration and reads for the workspace scan."""

from layerlens.files.source import FileSource, LocalFileSource, expand_braces, glob_match

__all__ = ["FileSource", "LocalFileSource", "expand_braces", "glob_match"]
