"""Entry: start the API server."""
import logging

import uvicorn

from songdeck.config import API_HOST, API_PORT, LOG_FORMAT, LOG_LEVEL


def main() -> None:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    uvicorn.run(
        "songdeck.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=False,
    )


if __name__ == "__main__":
    main()
