"""
Launch the curve simplification API with Uvicorn.

``python run.py`` serves ``backend.app.main:app``.  The bind address
comes from ``SIMPLIFY_HOST`` (default ``0.0.0.0``) and
``SIMPLIFY_PORT`` (default ``8000``).  Set ``SIMPLIFY_DEBUG`` to log
the details of every simplification pass and ``TAGGED_CURVE_VERIFY``
to check that simplified segments are appended in curve order.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import uvicorn

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger("simplify")

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000


def main() -> None:
    """Serve the simplification API on the configured address."""
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.append(str(repo_root))

    from backend.app.main import app  # type: ignore

    host = os.getenv("SIMPLIFY_HOST", DEFAULT_HOST)
    port = int(os.getenv("SIMPLIFY_PORT", str(DEFAULT_PORT)))
    logger.info("Serving curve simplification API on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
