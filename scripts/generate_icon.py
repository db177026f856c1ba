#!/usr/bin/env python3
"""Generate the keyboard app icon - gold keys on a dark rounded square."""

import os
import sys
from pathlib import Path

script_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.dirname(script_dir))

from keyicon.cli import main  # noqa: E402

if __name__ == '__main__':
    output_path = Path(script_dir, '..', 'build', 'icons')
    raise SystemExit(main(default_output=output_path))
