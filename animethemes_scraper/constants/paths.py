"""File and directory path constants."""

from pathlib import Path

# File paths
OUTPUT_JSON_PATH = Path("output.json")
