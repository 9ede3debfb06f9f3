"""Entry point for running tictacai via ``python -m tictacai``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered tic-tac-toe web server."""

    logging.basicConfig(
        level=os.environ.get("TICTACAI_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("TICTACAI_HOST", "0.0.0.0")
    port = int(os.environ.get("TICTACAI_PORT", "8000"))
    uvicorn.run("tictacai.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
