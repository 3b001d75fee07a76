"""Run the bookmark launcher service until interrupted."""
import asyncio
import logging
import signal
import sys
from typing import Optional

from bookmark_launchers.config import Config, get_config
from bookmark_launchers.service import LauncherService


def configure_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )


async def main(config: Optional[Config] = None) -> None:
    """Start the service and keep it running until SIGINT/SIGTERM."""
    config = config or get_config()
    service = LauncherService(config)

    stop_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_requested.set)
        except NotImplementedError:  # Windows
            pass

    await service.start()
    try:
        await stop_requested.wait()
    finally:
        await service.stop()


def run() -> None:
    """Console script entry point."""
    config = get_config()
    configure_logging(config)
    try:
        asyncio.run(main(config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
