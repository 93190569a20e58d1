"""Run the deepchat API with uvicorn."""

import uvicorn

from deepchat.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "deepchat.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
