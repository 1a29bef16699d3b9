"""Entry point for dojo CLI client."""

import argparse
import sys

from cli.api_client import DojoAPIClient
from cli.console import ConsoleUI
from core.utils import split_list


def main():
    parser = argparse.ArgumentParser(description='Dojo - adaptive kana drills')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument(
        '--groups',
        default='hiragana',
        help='Comma separated kana groups to drill (default: hiragana)'
    )
    parser.add_argument(
        '--reverse',
        action='store_true',
        help='Show the romaji and answer with the kana'
    )
    args = parser.parse_args()

    client = DojoAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client)

    try:
        ui.run(split_list(args.groups), reverse=args.reverse)
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
