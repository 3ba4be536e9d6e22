#!/usr/bin/env python3
"""
VTCS Shop launcher

Seeds the lab database on request and serves the vulnerable shop with
Flask's development server.
"""

import argparse
import sys
from typing import List, Optional

import colorama
from colorama import Fore, Style

from vtcs_shop.app import create_app
from vtcs_shop.log import setup_logging
from vtcs_shop.schema import seed_database


def print_banner(host: str, port: int, engine: str):
    """Print the startup warning"""
    print(f"\n{Fore.RED}{'='*70}{Style.RESET_ALL}")
    print(f"{Fore.RED}VTCS SHOP - INTENTIONALLY VULNERABLE - FOR TRAINING ONLY{Style.RESET_ALL}")
    print(f"{Fore.RED}{'='*70}{Style.RESET_ALL}\n")
    print(f"Listening: http://{host}:{port}/")
    print(f"Backend:   {engine}\n")


def init_db(app) -> bool:
    """Create tables and sample rows on the configured backend"""
    backend = app.extensions['vtcs_backend']
    with app.app_context():
        db = backend.connect()
        try:
            return seed_database(db)
        finally:
            db.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="VTCS Shop - vulnerable e-commerce demo for cyber range training",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s
  %(prog)s --port 8080 -v
  DB_ENGINE=sqlite %(prog)s --init-db
        """
    )

    parser.add_argument('--host', default='0.0.0.0',
                        help="Interface to bind")
    parser.add_argument('-p', '--port', type=int, default=5000,
                        help="Port to listen on")
    parser.add_argument('--debug', action='store_true',
                        help="Enable the Flask debugger")
    parser.add_argument('--init-db', action='store_true',
                        help="Create tables and sample data before serving")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Log every backend command")
    parser.add_argument('--no-color', action='store_true',
                        help="Disable colored output")

    args = parser.parse_args(argv)

    colorama.init(strip=True if args.no_color else None)

    logger = setup_logging(args.verbose)
    app = create_app()

    if args.init_db:
        init_db(app)

    print_banner(args.host, args.port, app.config['DB_ENGINE'])
    logger.info(f"Starting VTCS Shop on {args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)
    colorama.deinit()

    return 0


if __name__ == "__main__":
    sys.exit(main())
