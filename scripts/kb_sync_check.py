"""
Kiem tra knowledge sync cua Catalog Admin dang chay: GET /sync/status, tuy chon drain outbox.
Exit codes: 0 ok, 2 API khong ket noi duoc, 3 con event failed, 4 backlog vuot --max-pending.
Chay: python scripts/kb_sync_check.py --base-url http://localhost:8000 --drain
"""
import argparse
import os
import sys

import httpx

TIMEOUT = 20

EXIT_UNREACHABLE = 2
EXIT_FAILED_EVENTS = 3
EXIT_BACKLOG = 4


def _get(client: httpx.Client, path: str, **params) -> dict:
    r = client.get(path, params=params or None)
    r.raise_for_status()
    return r.json()


def main() -> int:
    parser = argparse.ArgumentParser(description="Kiem tra / drain outbox knowledge sync")
    parser.add_argument(
        "--base-url",
        type=str,
        default=os.environ.get("CATALOG_ADMIN_URL", "http://localhost:8000"),
        help="URL API (mac dinh CATALOG_ADMIN_URL hoac http://localhost:8000)",
    )
    parser.add_argument("--drain", action="store_true", help="Goi POST /sync/outbox/drain truoc khi kiem tra")
    parser.add_argument("--limit", type=int, default=None, help="So event toi da moi lan drain")
    parser.add_argument("--max-pending", type=int, default=100, help="Nguong backlog pending")
    args = parser.parse_args()

    try:
        with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=TIMEOUT) as client:
            if args.drain:
                params = {"limit": args.limit} if args.limit else None
                r = client.post("/sync/outbox/drain", params=params)
                r.raise_for_status()
                drained = r.json()
                print(
                    f"[DRAIN] processed={drained['processed']} failed={drained['failed']} "
                    f"remaining={drained['remaining']}"
                )
            status = _get(client, "/sync/status")
            failed = _get(client, "/sync/outbox", status="failed", limit=500)
    except httpx.HTTPError as e:
        print(f"[ERROR] Khong goi duoc API {args.base_url}: {e}")
        return EXIT_UNREACHABLE

    pending = status.get("pending_count") or 0
    print(
        f"[STATUS] worker_enabled={status['enabled']} interval={status['interval_seconds']}s "
        f"last_tick_at={status['last_tick_at'] or '-'} pending={pending}"
    )
    failed_items = failed.get("items") or []
    for event in failed_items:
        print(
            f"[FAILED] event={event['id']} item={event['item_id']} action={event['action']} "
            f"attempts={event['attempts']} error={(event.get('last_error') or '')[:120]}"
        )
    if failed_items:
        return EXIT_FAILED_EVENTS
    if pending > args.max_pending:
        print(f"[WARN] Backlog {pending} > {args.max_pending}. Bat KB_SYNC_ENABLED hoac chay --drain.")
        return EXIT_BACKLOG
    print("[OK]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
