"""
Headless map sync runner.

Polls a gateway and keeps an in-process map in sync, logging a summary
after every snapshot.

Usage:
    python -m mapsync
    python -m mapsync --url http://localhost:5000/api/flights --interval 5
"""

import argparse
import logging
import signal
import threading
from dataclasses import replace

from mapsync.client import MapSyncClient
from mapsync.config import config

logger = logging.getLogger('mapsync')


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Keep a flight map in sync with the gateway')
    parser.add_argument('--url', default=config.polling.gateway_url, help='Gateway /api/flights URL')
    parser.add_argument('--interval', type=float, default=config.polling.interval,
                        help='Seconds between polls')
    parser.add_argument('--run-for', type=float, default=None,
                        help='Stop after this many seconds (default: until interrupted)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    client_config = replace(
        config,
        polling=replace(config.polling, gateway_url=args.url, interval=args.interval),
    )
    client = MapSyncClient(client_config)

    stop = threading.Event()
    previous_handlers = {
        signum: signal.signal(signum, lambda *_: stop.set())
        for signum in (signal.SIGINT, signal.SIGTERM)
    }

    client.initialize()
    client.start_polling()
    try:
        stop.wait(args.run_for)
    finally:
        client.stop_polling()
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)
        logger.info(f'Final stats: {client.stats}')


if __name__ == '__main__':
    main()
