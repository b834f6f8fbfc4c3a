from timetrack import create_app
from timetrack.core.config import get_settings
from timetrack.core.logging import configure_logging

settings = get_settings()
configure_logging(settings)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
