"""Command shell over a small persistent sector-based filesystem."""

__version__ = "1.0.0"
__all__ = [
    "console",
    "textutil",
    "disk",
    "filesystem",
    "session",
    "filecmds",
    "textcmds",
    "diskcmds",
    "usercmds",
    "envcmds",
    "misccmds",
    "shell",
]