"""Main entry point for the plugwire CLI.

Usage:
    python -m plugwire --help
    plugwire --help  # If installed via pip/uv
"""

from plugwire.cli import main

if __name__ == "__main__":
    main()
