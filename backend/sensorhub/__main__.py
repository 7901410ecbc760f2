"""Run the API with uvicorn: `python -m sensorhub`."""

import uvicorn

from sensorhub.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "sensorhub.main:app", host="0.0.0.0", port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
