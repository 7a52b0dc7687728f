from __future__ import annotations

import argparse
import json
import logging

from .config import ConfigError, load_config
from .exceptions import ActionDeniedError, ApiError
from .notifications import to_user_facing_error
from .session import ApiSession
from .stock_delta import ClientValidationError, compute_stock_delta


def _session(args: argparse.Namespace) -> ApiSession:
    return ApiSession(load_config(args.env_file))


def cmd_login(args: argparse.Namespace) -> None:
    session = _session(args)
    actor = session.login(args.email, args.password)
    print(json.dumps({"user": actor.model_dump(by_alias=True, mode="json")}, indent=2))


def cmd_logout(args: argparse.Namespace) -> None:
    session = _session(args)
    session.logout(background=False)
    print(json.dumps({"authenticated": session.is_authenticated}, indent=2))


def cmd_whoami(args: argparse.Namespace) -> None:
    session = _session(args)
    actor = session.actor
    payload = actor.model_dump(by_alias=True, mode="json") if actor else None
    print(json.dumps({"authenticated": session.is_authenticated, "user": payload}, indent=2))


def cmd_health(args: argparse.Namespace) -> None:
    session = _session(args)
    reachable = session.health_monitor().check()
    print(json.dumps({"reachable": reachable}, indent=2))
    if not reachable:
        raise SystemExit(1)


def cmd_preview(args: argparse.Namespace) -> None:
    result = compute_stock_delta(args.current, args.change_type, args.quantity)
    print(
        json.dumps(
            {
                "previousQuantity": result.previous_quantity,
                "newQuantity": result.new_quantity,
                "signedChange": result.signed_change,
            },
            indent=2,
        )
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smartstock", description="SmartStock client CLI")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login_parser = subparsers.add_parser("login")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", required=True)
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout")
    logout_parser.set_defaults(func=cmd_logout)

    whoami_parser = subparsers.add_parser("whoami")
    whoami_parser.set_defaults(func=cmd_whoami)

    health_parser = subparsers.add_parser("health")
    health_parser.set_defaults(func=cmd_health)

    preview_parser = subparsers.add_parser("preview")
    preview_parser.add_argument("--current", type=int, required=True)
    preview_parser.add_argument(
        "--change-type", required=True, choices=["restock", "sale", "adjustment", "return"]
    )
    preview_parser.add_argument("--quantity", type=int, required=True)
    preview_parser.set_defaults(func=cmd_preview)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    try:
        args.func(args)
    except ApiError as exc:
        facing = to_user_facing_error(exc)
        print(
            json.dumps(
                {"error": exc.code, "message": facing.message, "details": facing.technical_details},
                indent=2,
            )
        )
        raise SystemExit(1) from exc
    except (ActionDeniedError, ClientValidationError, ConfigError) as exc:
        print(json.dumps({"error": type(exc).__name__, "message": str(exc)}, indent=2))
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
