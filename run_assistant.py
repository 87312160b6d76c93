#!/usr/bin/env python
"""Interactive car service leads assistant.

Usage (ensure virtualenv + .env loaded or auto-load in package works):
  python run_assistant.py

Type a question such as "Show me leads for Toyota", or 'exit' to quit.
"""
from __future__ import annotations

import sys
from leads_assistant.cli import main


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
