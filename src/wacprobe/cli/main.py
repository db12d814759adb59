# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""wacprobe CLI."""

from __future__ import annotations

import argparse
import sys

from ..config import ProbeConfig, ProbeDefaults
from ..errors import ConfigError, SourceError
from ..log import setup_logging
from ..probe.report import JsonReporter, TextReporter
from ..probe.source import open_url_source
from ..runtime import AccessProbe


def build_parser(defaults: ProbeDefaults | None = None) -> argparse.ArgumentParser:
    defaults = defaults or ProbeDefaults.from_env()
    parser = argparse.ArgumentParser(
        description="Probe URLs and report which ones grant access (web access control checker)",
    )
    parser.add_argument("url_file", metavar="URL_FILE", help="File with URLs on separate lines. Stdin is used when - is provided")

    request = parser.add_argument_group("request options")
    request.add_argument("-t", "--threads", type=int, default=defaults.threads, help="Number of request threads (1-100)")
    request.add_argument("-c", "--cookie", help="Cookie to use for requests")
    request.add_argument("-a", "--auth", help="Authorization to use for requests in format username:password")
    request.add_argument(
        "-w",
        "--wait",
        type=int,
        default=defaults.wait_seconds,
        help="Number of seconds to wait before timing out request (1-900)",
    )

    response = parser.add_argument_group("response options")
    response.add_argument("-s", "--status", type=int, help="Check for specific status code returned such as 401")
    response.add_argument("-r", "--redirect", help="Check for redirect of 301/302 and Location header")
    response.add_argument("-b", "--body", help="Check for custom body content returned such as 'login is invalid'")

    output = parser.add_argument_group("output options")
    output.add_argument("--json", action="store_true", help="Output one JSON object per URL instead of text lines")
    output.add_argument("--log-level", help="Logging level for diagnostics on stderr (default: WARNING)")
    return parser


def config_from_args(args: argparse.Namespace) -> ProbeConfig:
    return ProbeConfig.build(
        threads=args.threads,
        wait_seconds=args.wait,
        cookie=args.cookie,
        auth=args.auth,
        status=args.status,
        redirect=args.redirect,
        body=args.body,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = config_from_args(args)
        source = open_url_source(args.url_file)
    except ConfigError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1

    reporter = JsonReporter() if args.json else TextReporter()
    try:
        with source as lines, AccessProbe(config, reporter=reporter) as probe:
            probe.run(lines)
    except SourceError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
