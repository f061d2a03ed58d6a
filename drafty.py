#!/usr/bin/env python3
"""
Drafty - inline markup to formatted document converter

Simple usage:
    python drafty.py convert note.txt               # Prints the Drafty JSON
    python drafty.py convert note.txt -f html       # Prints HTML
    python drafty.py convert note.txt -o note.docx  # Writes a Word document
    python drafty.py show note.json                 # Renders in the terminal
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from drafty_text.cli import app

if __name__ == "__main__":
    app()
