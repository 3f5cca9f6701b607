"""Regular expressions shared by the classifier, heading parser and tag code."""

from __future__ import annotations

import re

# Scene heading prefixes, followed by a period or whitespace. Longest first so
# the captured group names the full prefix.
SCENE_HEADING_PREFIXES = ("INT./EXT", "INT/EXT", "I./E", "I/E", "INT", "EXT", "EST")

SCENE_HEADING_RE = re.compile(
    r"^(" + "|".join(re.escape(p) for p in SCENE_HEADING_PREFIXES) + r")[.\s]",
    re.IGNORECASE,
)

# Relationship directive lines: @location:, @characters:, @character:, @scene:
TAG_DIRECTIVE_RE = re.compile(r"^\s*@(location|characters?|scene):", re.IGNORECASE)

LOCATION_TAG_RE = re.compile(r"^\s*@location:\s*(.*)$", re.IGNORECASE)
CHARACTERS_TAG_RE = re.compile(r"^\s*@characters:\s*(.*)$", re.IGNORECASE)
CHARACTER_TAG_RE = re.compile(r"^\s*@character:\s*(.*)$", re.IGNORECASE)

TAG_ID_RE = re.compile(r"[\w-]+")

# Character cue: an uppercase name, optionally followed by an extension such as
# (V.O.) or (CONT'D), optionally marked ^ for dual dialogue.
CHARACTER_CUE_RE = re.compile(r"^[A-Z][A-Z0-9\s.'#&-]*(\s*\([^)]*\))?\s*\^?$")

CHARACTER_EXTENSION_RE = re.compile(r"\s*\([^)]*\)")

TERMINAL_PUNCTUATION = (".", "!", "?", ":", ";")
