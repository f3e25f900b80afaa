"""Local launcher: SQLite beside the script (or the frozen executable) and the first free port."""
import logging
import os
import socket
import sys

import uvicorn

logger = logging.getLogger("paracal.start")


def app_dir() -> str:
    if getattr(sys, "frozen", False):
        return os.path.dirname(sys.executable)
    return os.path.dirname(os.path.abspath(__file__))


def sqlite_url_in(base_dir: str) -> str:
    return "sqlite:///" + os.path.join(base_dir, "data", "calendar.db")


def first_free_port(host: str, preferred: int, attempts: int = 10) -> int:
    for port in range(preferred, preferred + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind((host, port))
            except OSError:
                logger.warning("[start] Port %d is busy", port)
                continue
        return port
    raise RuntimeError(f"no free port in {preferred}..{preferred + attempts - 1}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # paracal.db reads DATABASE_URL at import time
    os.environ.setdefault("DATABASE_URL", sqlite_url_in(app_dir()))
    logger.info("[start] Database: %s", os.environ["DATABASE_URL"])

    from paracal.main import app

    host = os.getenv("HOST", "127.0.0.1")
    try:
        port = first_free_port(host, int(os.getenv("PORT", "8000")))
    except RuntimeError as exc:
        logger.error("[start] %s", exc)
        sys.exit(1)

    # the app object is passed directly so frozen builds bundle it
    uvicorn.run(app, host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
