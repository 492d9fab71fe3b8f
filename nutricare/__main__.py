"""Run the API with uvicorn: python -m nutricare"""

import uvicorn

from nutricare.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "nutricare.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.APP_ENV == "dev" and settings.DEBUG,
    )


if __name__ == "__main__":
    main()
