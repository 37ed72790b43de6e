"""CLI entry point for configuration introspection.

Usage:
    python -m summarize_client.config
    python -m summarize_client.config --check
    python -m summarize_client.config --json
"""

from .introspection import main

if __name__ == "__main__":
    main()
