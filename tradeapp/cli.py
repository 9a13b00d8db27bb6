from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from .client import AuthApiClient, TradeApiClient
from .errors import ApiFailure, ClientError
from .schemas import (
    ApiModel,
    ApproveByEmailRequest,
    ApproveByPushRequest,
    LoginRequest,
    RegistrationRequest,
)
from .settings import get_trade_api_settings


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tradeapp",
        description="Call the trading platform authentication API.",
    )
    parser.add_argument(
        "--base-url",
        help="Override the configured API base URL",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Emit structured request logs to stderr",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    register = commands.add_parser("register", help="Register a new account")
    register.add_argument("--login", required=True)
    register.add_argument("--password", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--aid", required=True, help="App instance id")

    login = commands.add_parser("login", help="Log in with login and password")
    login.add_argument("--login", required=True)
    login.add_argument("--password", required=True)
    login.add_argument("--aid", required=True, help="App instance id")

    approve_email = commands.add_parser(
        "approve-email", help="Confirm login with the emailed code"
    )
    approve_email.add_argument("--code", required=True)
    approve_email.add_argument("--token", required=True)

    approve_push = commands.add_parser(
        "approve-push", help="Confirm login with the push secret"
    )
    approve_push.add_argument("--secret", required=True)
    approve_push.add_argument("--token", required=True)
    return parser


def _run(client: TradeApiClient, args: argparse.Namespace) -> ApiModel:
    if args.command == "register":
        return client.register(
            RegistrationRequest(
                login=args.login, password=args.password, email=args.email
            ),
            args.aid,
        )
    if args.command == "login":
        return client.login(
            LoginRequest(login=args.login, password=args.password), args.aid
        )
    if args.command == "approve-email":
        return client.approve_by_email(
            ApproveByEmailRequest(email_code=args.code), args.token
        )
    return client.approve_by_push(
        ApproveByPushRequest(secret_key=args.secret), args.token
    )


def main(argv: list[str] | None = None, client: TradeApiClient | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.INFO, stream=sys.stderr)

    if client is None:
        endpoints = get_trade_api_settings().endpoints()
        if args.base_url:
            endpoints = replace(endpoints, base_url=args.base_url)
        client = AuthApiClient(endpoints)

    try:
        response = _run(client, args)
    except ClientError as exc:
        print(f"ERROR: request rejected (code={exc.code}) {exc.message}".rstrip())
        return 3
    except ApiFailure as exc:
        print(f"ERROR: {exc}")
        return 1

    print(json.dumps(response.model_dump(by_alias=True), ensure_ascii=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
