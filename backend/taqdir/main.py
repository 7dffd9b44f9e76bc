"""ASGI entrypoint: ``uvicorn taqdir.main:app``."""

from __future__ import annotations

import logging

from taqdir.api.app import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("taqdir.main:app", host="0.0.0.0", port=8000)
