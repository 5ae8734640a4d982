# product_service/__main__.py

"""
Runs the Product Service with uvicorn: `python -m product_service`.
"""
import uvicorn

from .config import load_settings


def main():
    settings = load_settings()
    uvicorn.run(
        "product_service.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
