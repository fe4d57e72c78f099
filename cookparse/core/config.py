# cookparse/core/config.py
import os

# --- Runtime settings (override via env) ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- Markup ---
FRONT_MATTER_DELIMITER = "---"
COMMENT_PREFIXES = ("//", ">")

INGREDIENT_MARKER = "@"
COOKWARE_MARKER = "#"
TIMER_MARKER = "~"
MARKERS = INGREDIENT_MARKER + COOKWARE_MARKER + TIMER_MARKER

ESCAPE_CHAR = "\\"
OPTIONAL_SUFFIX = "?"
QUANTITY_UNIT_SEPARATOR = "%"

# Characters (besides whitespace) that end a bare timer segment
TIMER_DELIMITERS = ",.;:!?()"
