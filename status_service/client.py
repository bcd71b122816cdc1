"""HTTP client and command line front-end for the status API."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional, Sequence

import httpx

DEFAULT_BASE_URL = "http://localhost:8000/api"


class StatusAPIError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class StatusClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: float = 10.0, client: httpx.Client | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def submit(self, status: int, change_date: Optional[str] = None) -> int:
        body: dict[str, Any] = {"status": status}
        if change_date:
            body["changeDate"] = change_date
        resp = self._client.post(f"{self.base_url}/status", json=body)
        return int(self._check(resp).json())

    def history(self, date_from: Optional[str] = None) -> list[dict[str, Any]]:
        params = {"dateFrom": date_from} if date_from else None
        resp = self._client.get(f"{self.base_url}/status", params=params)
        return self._check(resp).json()

    def current(self) -> dict[str, Any]:
        resp = self._client.get(f"{self.base_url}/status/current")
        return self._check(resp).json()[0]

    @staticmethod
    def _check(resp: httpx.Response) -> httpx.Response:
        if resp.is_success:
            return resp
        raise StatusAPIError(resp.status_code, resp.text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Submit or read service status records.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help=f"API root (default {DEFAULT_BASE_URL}).")
    sub = parser.add_subparsers(dest="command", required=True)

    submit = sub.add_parser("submit", help="Record a status change.")
    submit.add_argument("status", type=int, help="100 = ok, 200 = partial failure, 300 = service down")
    submit.add_argument("--change-date", default=None, help="Effective time in the server's date layout.")

    history = sub.add_parser("list", help="List status history, newest first.")
    history.add_argument("--date-from", default=None, help="RFC3339 lower bound.")

    sub.add_parser("current", help="Show the latest status.")
    return parser


def main(argv: Sequence[str] | None = None, client: httpx.Client | None = None) -> int:
    args = build_parser().parse_args(argv)
    api = StatusClient(args.base_url, client=client)
    try:
        if args.command == "submit":
            print(api.submit(args.status, args.change_date))
        elif args.command == "list":
            print(json.dumps(api.history(args.date_from), indent=2))
        else:
            print(json.dumps(api.current(), indent=2))
    except StatusAPIError as exc:
        print(f"Request failed ({exc.status_code}): {exc.message}", file=sys.stderr)
        return 1
    except httpx.HTTPError as exc:
        print(f"Request failed: {exc}", file=sys.stderr)
        return 1
    finally:
        api.close()
    return 0


__all__ = ["StatusAPIError", "StatusClient", "build_parser", "main"]
