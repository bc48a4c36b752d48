"""Console entry point: the Litestar CLI bound to the Sakai app."""

from __future__ import annotations

import os
import sys
from typing import NoReturn


def run_cli() -> NoReturn:
    """Application Entrypoint."""
    os.environ.setdefault("LITESTAR_APP", "sakai.server.asgi:create_app")
    from litestar.__main__ import run_cli as run_litestar_cli

    run_litestar_cli()
    sys.exit(0)


if __name__ == "__main__":
    run_cli()
