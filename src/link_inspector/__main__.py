"""CLI entrypoint for link_inspector."""

from __future__ import annotations

from link_inspector.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
