from __future__ import annotations

import argparse
import asyncio
import json
import os
import sys

from hrauth.credential_store import Credential, FileCredentialStore, MemoryCredentialStore
from hrauth.session import SessionClaims, SessionManager
from hrclient.api import ApiClient, create_client
from hrclient.constants import APP_VERSION, CLIENT_METHODS, LOGGER
from hrclient.coordinator import RefreshCoordinator, RefreshState
from hrclient.env import ClientSettings, load_env, setup_logging, validate_env
from hrclient.errors import (
    ApiError,
    AuthenticationError,
    NetworkError,
    RefreshTimeoutError,
    UnexpectedError,
    ValidationError,
    normalize_error,
)
from hrclient.pipeline import RequestPipeline, RequestSpec


def build_client(**kwargs) -> ApiClient:
    load_env()
    setup_logging()
    validate_env()
    return create_client(ClientSettings.from_env(), **kwargs)


async def run_request(client: ApiClient, method: str, path: str, body: object = None) -> object:
    user_name = os.getenv("HR_API_USERNAME", "").strip()
    password = os.getenv("HR_API_PASSWORD", "")
    if user_name and client.store.get() is None:
        await client.login(user_name, password)

    verb = getattr(client, method)
    if method in {"post", "put"}:
        return await verb(path, body)
    return await verb(path)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Call the HR API with session handling.")
    parser.add_argument("method", choices=sorted(CLIENT_METHODS))
    parser.add_argument("path")
    parser.add_argument("--body", help="JSON request body for post/put.")
    parser.add_argument("--version", action="version", version=APP_VERSION)
    return parser.parse_args(argv)


async def _amain(args: argparse.Namespace) -> int:
    body = json.loads(args.body) if args.body else None

    def navigate(route: str) -> None:
        LOGGER.warning("Session ended; sign in again (%s).", route)

    async with build_client(navigate=navigate) as client:
        try:
            payload = await run_request(client, args.method, args.path, body)
        except ApiError as error:
            print(json.dumps(error.as_dict(), indent=2), file=sys.stderr)
            return 1
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(_amain(_parse_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
