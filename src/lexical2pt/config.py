"""Local configuration for lexical2pt."""

from __future__ import annotations

import os


DEFAULT_KEY_SALT_LENGTH = 6
DEFAULT_EXCERPT_MAX_LENGTH = 160
DEFAULT_LINK_HREF = "#"
DEFAULT_HEADING_STYLE = "h2"
DEFAULT_BLOCK_STYLE = "normal"

LEXICAL2PT_KEY_SALT_LENGTH = int(os.getenv("LEXICAL2PT_KEY_SALT_LENGTH", str(DEFAULT_KEY_SALT_LENGTH)))
LEXICAL2PT_EXCERPT_MAX_LENGTH = int(os.getenv("LEXICAL2PT_EXCERPT_MAX_LENGTH", str(DEFAULT_EXCERPT_MAX_LENGTH)))
