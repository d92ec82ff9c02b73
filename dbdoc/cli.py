#!/usr/bin/env python3
"""Command line entry point"""
import argparse
import sys
import traceback

from . import __version__
from .catalog import DEFAULT_DRIVER, DEFAULT_PORT, PARAMS_SOURCES
from .documenter import MySQLDocumenter
from .exceptions import ConfigError

REQUIRED_OPTIONS = (
    ('host', 'host'),
    ('user', 'user'),
    ('password', 'pass'),
    ('database', 'database'),
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Generate html documentation for a MySQL database')
    parser.add_argument('--version', action='version', version=__version__)
    parser.add_argument('--host', help='DB host address')
    parser.add_argument('-u', '--user', help='DB username')
    parser.add_argument('-p', '--pass', dest='password', help='DB password')
    parser.add_argument('-d', '--database', help='DB name')
    parser.add_argument('-o', '--out', help='[optional] output folder, default to ./')
    parser.add_argument('-s', '--style', help='[optional] path to style(css) file')
    parser.add_argument('--port', type=int, default=DEFAULT_PORT, help='DB port')
    parser.add_argument('--driver', default=DEFAULT_DRIVER, help='ODBC driver name')
    parser.add_argument('--params-source', choices=PARAMS_SOURCES, default='proc',
                        help='Where to read routine parameters from (information_schema for MySQL 8+)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    for option, name in REQUIRED_OPTIONS:
        if not getattr(args, option):
            print(f"Missing {name} parameter")
            sys.exit(1)

    try:
        documenter = MySQLDocumenter()
        documenter.set_database(args.host, args.user, args.password, args.database,
                                port=args.port, driver=args.driver)
        documenter.params_source = args.params_source

        if args.out:
            documenter.set_output_directory(args.out)

        if args.style:
            documenter.set_style_template(args.style)

        documenter.generate()

    except ConfigError as e:
        print(f"Error: {str(e)}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {str(e)}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == '__main__':
    main()
