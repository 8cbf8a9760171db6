#!/usr/bin/env python3
"""
Main entry point for the Sonnet 5 watch service.

Starts the HTTP API and the periodic source checks.

Usage:
    python main.py                  # serve on $PORT (default 8080)
    python main.py --port 9000      # serve on a specific port
"""

import argparse
import logging

import uvicorn

from api.app import create_app
from core.sentinel import Sentinel
from utils.logger import setup_logging_from_settings


def main():
    parser = argparse.ArgumentParser(
        description='Sonnet 5 Watch - release detection service'
    )
    parser.add_argument('--host', type=str, default='0.0.0.0', help='Bind address (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None, help='Port (default: $PORT or 8080)')
    parser.add_argument('--config', type=str, default=None, help='Path to sources.yaml')
    parser.add_argument('--settings', type=str, default=None, help='Path to settings.yaml')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose logging')

    args = parser.parse_args()

    sentinel = Sentinel(config_path=args.config, settings_path=args.settings)
    setup_logging_from_settings(sentinel.registry.get_settings(), verbose=args.verbose)

    logger = logging.getLogger('main')
    port = args.port or sentinel.env.port
    logger.info(f"Starting server on port {port}...")
    logger.info(f"Check interval: {sentinel.scheduler.interval}s")
    logger.info(f"Sources: {', '.join(sentinel.source_names)}")

    app = create_app(sentinel)
    uvicorn.run(app, host=args.host, port=port, log_config=None)


if __name__ == '__main__':
    main()
