"""Uvicorn entrypoint: `python -m pet_catalog.api.main`."""

from __future__ import annotations

import uvicorn

from pet_catalog.api.api_config import get_api_config


def main() -> None:
    config = get_api_config()
    uvicorn.run("pet_catalog.api.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
