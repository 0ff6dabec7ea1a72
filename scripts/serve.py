"""Run the API with uvicorn using HOST/PORT from the environment."""
from __future__ import annotations

import uvicorn

from userapi.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("userapi.app:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
