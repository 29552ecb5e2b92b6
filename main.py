#!/usr/bin/env python3
"""OpenAPI Path Generator - Entry point."""
from pathgen.cli.app import main


if __name__ == "__main__":
    main()
