"""Command line front end for one-off requests."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Sequence

from .client import Client
from .exceptions import JHttpError
from .options import ClientConfig, ClientOption, add_header, add_params, set_cookies, set_retry, set_timeout


def _split_pair(raw: str, sep: str) -> tuple[str, str]:
    key, found, value = raw.partition(sep)
    if not found or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY{sep}VALUE, got {raw!r}")
    return key.strip(), value.strip()


def _header(raw: str) -> tuple[str, str]:
    return _split_pair(raw, ":")


def _pair(raw: str) -> tuple[str, str]:
    return _split_pair(raw, "=")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jhttp")
    parser.add_argument("method", choices=["get", "post"])
    parser.add_argument("url")
    parser.add_argument("-H", "--header", action="append", default=[], type=_header)
    parser.add_argument("-p", "--param", action="append", default=[], type=_pair)
    parser.add_argument("-b", "--cookie", action="append", default=[], type=_pair)
    body = parser.add_mutually_exclusive_group()
    body.add_argument("-d", "--data", help="raw request body")
    body.add_argument("--json", dest="json_body", help="JSON request body")
    parser.add_argument("--retry", type=int)
    parser.add_argument("--timeout", type=float)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _payload(args: argparse.Namespace) -> Any:
    if args.json_body is not None:
        return json.loads(args.json_body)
    return args.data


def _format(data: Any) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False)


def _main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ClientConfig.from_env()
        payload = _payload(args)
    except (JHttpError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    options: list[ClientOption] = [add_header(key, value) for key, value in args.header]
    if args.cookie:
        options.append(set_cookies(args.cookie))
    if args.retry is not None:
        options.append(set_retry(args.retry))
    if args.timeout is not None:
        options.append(set_timeout(args.timeout))
    params = [add_params(key, value) for key, value in args.param]

    with Client(*options, config=config) as client:
        request = client.get if args.method == "get" else client.post
        try:
            result = request(args.url, payload, *params)
        except JHttpError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    print(_format(result.data))
    return 0


def main() -> None:
    raise SystemExit(_main())
