"""Entry point for running the bookmarks API."""

import os

import uvicorn


def main() -> None:
    """Serve the API with uvicorn."""
    host = os.getenv("HOST", "0.0.0.0")
    # PORT is what most PaaS platforms set
    port = int(os.getenv("PORT") or "8000")

    uvicorn.run(
        "api.main:app",
        host=host,
        port=port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
