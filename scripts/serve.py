#!/usr/bin/env python
"""Run the knowledge tools HTTP server.

Usage:
    python -m scripts.serve
"""

import uvicorn

from knowledge_mcp.config import get_settings


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    uvicorn.run(
        "knowledge_mcp.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
