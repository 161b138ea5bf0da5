#!/usr/bin/env python3
"""Print what a console user may do, as the API sees it.

Usage:
  export API_URL=http://localhost:8000 KEYCLOAK_URL=http://localhost:8080 \\
         KEYCLOAK_CLIENT_SECRET=... CHECK_USER=alice CHECK_PASSWORD=...
  uv run python scripts/check_access.py

  Against a dev server without Keycloak:
  uv run python scripts/check_access.py --subject alice
"""
from __future__ import annotations

import argparse
import os
import sys

import httpx


def get_token(
    keycloak_url: str,
    realm: str,
    client_id: str,
    client_secret: str,
    username: str,
    password: str,
) -> str:
    url = f"{keycloak_url.rstrip('/')}/realms/{realm}/protocol/openid-connect/token"
    r = httpx.post(
        url,
        data={
            "grant_type": "password",
            "client_id": client_id,
            "client_secret": client_secret,
            "username": username,
            "password": password,
        },
        headers={"Content-Type": "application/x-www-form-urlencoded"},
        timeout=30.0,
    )
    r.raise_for_status()
    return r.json()["access_token"]


def render_matrix(capabilities: dict[str, list[str]], actions: list[str]) -> str:
    width = max(len(r) for r in capabilities) + 2
    lines = ["".ljust(width) + " ".join(a[:4].ljust(4) for a in actions)]
    for resource, allowed in capabilities.items():
        cells = " ".join(("yes" if a in allowed else "-").ljust(4) for a in actions)
        lines.append(resource.ljust(width) + cells)
    return "\n".join(lines)


def main() -> int:
    parser = argparse.ArgumentParser(description="Show the capability matrix for a user")
    parser.add_argument("--subject", type=str, default=None, help="Dev mode: send X-User-Subject instead of a token")
    args = parser.parse_args()

    api_url = os.environ.get("API_URL", "http://localhost:8000").rstrip("/")
    if args.subject:
        headers = {"X-User-Subject": args.subject}
    else:
        token = get_token(
            os.environ.get("KEYCLOAK_URL", "http://localhost:8080"),
            os.environ.get("KEYCLOAK_REALM", "widgetadmin"),
            os.environ.get("KEYCLOAK_CLIENT_ID", "widgetadmin-api"),
            os.environ.get("KEYCLOAK_CLIENT_SECRET", ""),
            os.environ.get("CHECK_USER", "admin"),
            os.environ.get("CHECK_PASSWORD", "admin"),
        )
        headers = {"Authorization": f"Bearer {token}"}

    with httpx.Client(timeout=30.0) as client:
        me = client.get(f"{api_url}/v1/me", headers=headers)
        me.raise_for_status()
        catalog = client.get(f"{api_url}/v1/permissions/grouped", headers=headers)

    body = me.json()
    if body["state"] != "resolved":
        print(f"Principal {body['subject']} is {body['state']}; try again.")
        return 1

    role = body["role"]["name"] if body["role"] else "(no role)"
    print(f"Subject: {body['subject']}  Role: {role}  Admin: {body['is_admin']}")
    actions = (
        catalog.json()["items"][0]["actions"]
        if catalog.status_code == 200 and catalog.json()["items"]
        else sorted({a for allowed in body["capabilities"].values() for a in allowed})
    )
    print(render_matrix(body["capabilities"], actions))
    return 0


if __name__ == "__main__":
    sys.exit(main())
