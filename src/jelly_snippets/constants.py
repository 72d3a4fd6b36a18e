"""Default values, paths, and version constants."""

from __future__ import annotations

import os
from pathlib import Path

# Version
VERSION = "0.1.0"
APP_NAME = "jelly-snippets"

# XDG directories
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

# Application directories
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME

# Configuration files
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Escape symbols recognized inside a right-hand side
SYMBOL_NEWLINE = "%\\n"
SYMBOL_TAB = "%\\t"
SYMBOL_CURSOR_END = "%\\e"

# Snippet source parsing
NEWLINE_DIVIDER_SENTINEL = "\\n"  # backslash + n: split records on line breaks
DEFAULT_SNIPPET_DIVIDER = "-==-"
DEFAULT_PART_DIVIDER = " |+| "
DEFAULT_SNIPPET_SOURCE = """asd |+| snipped ya
-==-
- |+| #####
-==-
: |+| -
-==-
:: |+| hi
"""

# Trigger channels
TRIGGER_DISABLED = "disabled"
TRIGGER_ENABLED = "enabled"
TRIGGER_ENABLED_WITH_WHITESPACE = "enabled-with-whitespace"
DEFAULT_SPACE_TRIGGER = TRIGGER_ENABLED
DEFAULT_TAB_TRIGGER = TRIGGER_ENABLED
DEFAULT_ENTER_TRIGGER = TRIGGER_DISABLED

# Editor defaults
DEFAULT_INDENT_UNIT = "\t"

# Web API
WEB_DEFAULT_HOST = "127.0.0.1"
WEB_DEFAULT_PORT = 7866

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
