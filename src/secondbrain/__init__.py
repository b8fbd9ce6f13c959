"""
Second Brain Backend - bookmarks, notes and public brain sharing

Users keep links annotated with markdown notes and tags, and can publish
a selected subset behind a stable public share link.
"""

__version__ = "1.0.0"
