#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for pptx2slides.

This module centralizes the hardcoded values used across the import pipeline:

1. Type Definitions - Literal types shared by the record models
2. Slide Synthesis - Placeholder titles, layouts and the background palette
3. Package Structure - Part names and XML namespaces of the OOXML container
4. Security Constants - ZIP archive safety limits
5. Store Defaults - Values applied by document stores
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

SlideLayout = Literal["title-content", "content-only"]
ProgressEventType = Literal["started", "item_done", "finished", "error"]

# =============================================================================
# Slide Synthesis
# =============================================================================

LAYOUT_TITLE_CONTENT: SlideLayout = "title-content"
LAYOUT_CONTENT_ONLY: SlideLayout = "content-only"

DEFAULT_UNTITLED_SLIDE = "Untitled Slide"
DEFAULT_UNTITLED_PRESENTATION = "Untitled Presentation"

# Dark backgrounds cycled by slide position
DARK_PALETTE: tuple[str, ...] = (
    "#1e293b",
    "#0f172a",
    "#1f2937",
    "#374151",
    "#4b5563",
    "#6b7280",
)

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# =============================================================================
# Package Structure
# =============================================================================

SLIDE_PART_PATTERN = re.compile(r"^ppt/slides/slide(\d+)\.xml$")
SLIDE_INDEX_PATTERN = re.compile(r"(\d+)\.xml$")

NAMESPACES = {
    "p": "http://schemas.openxmlformats.org/presentationml/2006/main",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
}

PPTX_EXTENSION = ".pptx"

# =============================================================================
# Security Constants
# =============================================================================

DEFAULT_MAX_COMPRESSION_RATIO = 100.0  # Maximum compression ratio (uncompressed/compressed)
DEFAULT_MAX_UNCOMPRESSED_SIZE = 512 * 1024 * 1024  # 512MB maximum uncompressed size
DEFAULT_MAX_ZIP_ENTRIES = 10000  # Maximum number of entries in a ZIP archive

# =============================================================================
# Store Defaults
# =============================================================================

DEFAULT_BACKGROUND_COLOR = "#ffffff"

# Fields a slide update may touch; ids and timestamps are owned by the store
EDITABLE_SLIDE_FIELDS = ("title", "subtitle", "content", "image", "layout", "backgroundColor")

# =============================================================================
# CLI
# =============================================================================

CONFIG_ENV_VAR = "PPTX2SLIDES_CONFIG"
CONFIG_FILENAMES = (".pptx2slides.toml", ".pptx2slides.yaml", ".pptx2slides.yml", ".pptx2slides.json")

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_PACKAGE_ERROR = 2
EXIT_PERSISTENCE_ERROR = 3
EXIT_FILE_ERROR = 4
