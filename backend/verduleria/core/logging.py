"""
Logging setup for the API process
"""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # SQL echo is controlled separately; keep sqlalchemy quiet unless asked
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
