from __future__ import annotations

import argparse
import signal
import threading

from customer_server.config import get_settings
from customer_server.observability import configure_logging
from customer_server.server import CustomerServer


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="In-memory customer HTTP service")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    parser.add_argument("--log-level", default=settings.log_level, help="Root log level")
    parser.add_argument("--console-log", action="store_true", help="Human-readable logs instead of JSON")
    args = parser.parse_args(argv)

    configure_logging(args.log_level, json=settings.log_json and not args.console_log)

    stop_requested = threading.Event()

    def _request_stop(signum: int, frame: object) -> None:
        _ = frame
        stop_requested.set()

    previous_handlers = {sig: signal.signal(sig, _request_stop) for sig in (signal.SIGINT, signal.SIGTERM)}
    server = CustomerServer(port=args.port, host=args.host, settings=settings)
    try:
        server.start()
        stop_requested.wait()
    finally:
        server.stop()
        for sig, handler in previous_handlers.items():
            signal.signal(sig, handler)


if __name__ == "__main__":
    main()
