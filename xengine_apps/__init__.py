"""Command-line utilities: numbered file renaming, a TCP/UDP socket tester and JSON text helpers."""

__version__ = "0.1.0"
__all__ = ["json_tool", "member_iterator", "filesort", "sockettest"]