import logging

from .settings import settings

ISO_FMT = "%Y-%m-%dT%H:%M:%S%z"

def configure_logging(level: int | str | None = None) -> None:
    level = level or settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
        datefmt=ISO_FMT,
    )
    # passlib's bcrypt backend probe is noisy on newer bcrypt builds
    logging.getLogger("passlib").setLevel(logging.ERROR)
    # httpx logs request URLs, and the Gemini key travels in the query string
    logging.getLogger("httpx").setLevel(logging.WARNING)
