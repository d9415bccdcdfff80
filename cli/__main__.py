"""Entry point for lingodrill CLI client."""

import argparse
import sys

import requests

from cli.api_client import LingoAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Lingodrill - adaptive vocabulary practice')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--status',
        action='store_true',
        help='Print the status summary and exit'
    )
    args = parser.parse_args()

    client = LingoAPIClient(base_url=args.server)
    ui = ConsoleUI(client)

    try:
        if args.status:
            ui.print_status(client.get_status())
            return
        ui.run()
    except requests.ConnectionError:
        print(f'Cannot reach server at {args.server}')
        sys.exit(1)
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
