"""CLI entrypoint for the portfolio server.

Usage:
    python -m main serve --port 3000
    python -m main check-files
    python -m main config
"""
import argparse
import json

from app import run
from config import load_config
from files import check_files


def cmd_serve(args):
    config = load_config()
    overrides = {}
    if args.host:
        overrides['host'] = args.host
    if args.port:
        overrides['port'] = args.port
    run(config.with_overrides(**overrides), debug=args.debug)


def cmd_check_files(args):
    config = load_config()
    print(f"Document root: {config.document_root}")
    for f in check_files(config):
        status = 'FOUND' if f['exists'] else 'MISSING'
        print(f"  {f['file']}: {status} ({f['path']})")


def cmd_config(args):
    print(json.dumps(load_config().describe(), indent=2))


def main(argv=None):
    parser = argparse.ArgumentParser(prog="portfolio", description="Portfolio site backend")
    sub = parser.add_subparsers(dest="cmd")

    p_serve = sub.add_parser("serve", help="Run the web server")
    p_serve.add_argument("--host", help="Interface to bind (default: HOST or 0.0.0.0)")
    p_serve.add_argument("--port", type=int, help="Port to listen on (default: PORT or 3000)")
    p_serve.add_argument("--debug", action="store_true", help="Enable the Flask debugger")
    p_serve.set_defaults(func=cmd_serve)

    p_check = sub.add_parser("check-files", help="Report which expected files exist")
    p_check.set_defaults(func=cmd_check_files)

    p_config = sub.add_parser("config", help="Print the effective configuration")
    p_config.set_defaults(func=cmd_config)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 1
    try:
        args.func(args)
    except Exception as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
