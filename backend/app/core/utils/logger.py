import logging
import os


_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger("app")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the shared 'app' namespace (e.g. 'app.places_client')."""
    _configure_root()
    return logging.getLogger(f"app.{name}")


def set_level(level_name: str) -> None:
    _configure_root()
    logging.getLogger("app").setLevel(getattr(logging, (level_name or "INFO").upper(), logging.INFO))
