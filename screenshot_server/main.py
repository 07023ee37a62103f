"""screenshot-server — main entry point."""
from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path

from .config import load_config
from .server import init_server, serve_stdio


def setup_logging(level: str, log_dir: str) -> None:
    # stdout carries the MCP protocol, so the console handler must stay on stderr
    Path(log_dir).mkdir(parents=True, exist_ok=True)
    log_file = Path(log_dir) / "screenshot_server.log"
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file),
        ],
    )


logger = logging.getLogger(__name__)


async def _main() -> None:
    config_path = sys.argv[1] if len(sys.argv) > 1 else None

    cfg = load_config(config_path)
    setup_logging(cfg.log_level, cfg.log_dir)
    init_server(cfg)

    try:
        await serve_stdio()
    except Exception as e:
        logger.critical("Server error: %s", e, exc_info=True)
        raise


def main():
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
