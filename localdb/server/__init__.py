"""Servers — named logical databases bound to directories.

The registry provides:
- Registration: unique names bound to existing directories
- Lookup by name
- Status transitions: init -> running -> stopped
"""
