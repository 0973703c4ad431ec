# drive_proxy/__init__.py

"""
Drive proxy package initialization.

Expose package version constant so other modules and scripts can read
the application version programmatically (e.g. `from drive_proxy import __version__`).

The version comes from the top-level `VERSION` file when available so
releases can be bumped by editing a single file.
"""

from pathlib import Path

_root = Path(__file__).resolve().parents[1]
_version_file = _root / "VERSION"
if _version_file.exists():
	__version__ = _version_file.read_text(encoding="utf-8").strip()
else:
	__version__ = "0.0.0"
