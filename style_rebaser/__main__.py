"""
Main entry point for the style_rebaser package.

Allows running the rebaser as: python -m style_rebaser
"""

from style_rebaser.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
