import uvicorn

from image_gateway.config import settings


def run() -> None:
    uvicorn.run(
        "image_gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
