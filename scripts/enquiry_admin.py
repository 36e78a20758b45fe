#!/usr/bin/env python3
"""Command-line admin for the enquiry API.

사용법:
  python scripts/enquiry_admin.py --base-url http://127.0.0.1:5000 list --status new --search alice
  python scripts/enquiry_admin.py show 42
  python scripts/enquiry_admin.py set-status 42 contacted
  python scripts/enquiry_admin.py contacted 42 --off
  python scripts/enquiry_admin.py delete 42 --yes
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from client import EnquiryAdminClient
from models.enquiry import ENQUIRY_STATUSES
from services.enquiry_query import SORTABLE_FIELDS, SORT_DIRECTIONS

ROW_FORMAT = "{id:>5}  {status:<15} {contacted:<3} {uname:<24} {email:<30} {mobile}"


def _print_table(enquiries) -> None:
    print(ROW_FORMAT.format(id="ID", status="STATUS", contacted="C", uname="NAME", email="EMAIL", mobile="MOBILE"))
    for e in enquiries:
        print(
            ROW_FORMAT.format(
                id=e["id"],
                status=e.get("status") or "new",
                contacted="Y" if e.get("contacted") else "-",
                uname=e.get("uname") or "",
                email=e.get("email") or "",
                mobile=e.get("mobile") or "",
            )
        )
    print(f"\n{len(enquiries)} enquiries")


def _alert(message: str) -> None:
    print(f"[ERROR] {message}", file=sys.stderr)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Enquiry admin CLI")
    parser.add_argument(
        "--base-url",
        default=os.environ.get("ENQUIRY_API_URL", "http://127.0.0.1:5000"),
        help="API base URL (default: $ENQUIRY_API_URL or http://127.0.0.1:5000)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="list enquiries")
    p_list.add_argument("--sort", choices=SORTABLE_FIELDS, default="created_at")
    p_list.add_argument("--direction", choices=SORT_DIRECTIONS, default="desc")
    p_list.add_argument("--status", choices=("all",) + ENQUIRY_STATUSES, default="all")
    p_list.add_argument("--search", default="")

    p_show = sub.add_parser("show", help="show one enquiry as JSON")
    p_show.add_argument("id", type=int)

    p_status = sub.add_parser("set-status", help="change status")
    p_status.add_argument("id", type=int)
    p_status.add_argument("status", choices=ENQUIRY_STATUSES)

    p_contacted = sub.add_parser("contacted", help="set the contacted flag")
    p_contacted.add_argument("id", type=int)
    p_contacted.add_argument("--off", action="store_true", help="clear the flag instead")

    p_delete = sub.add_parser("delete", help="delete an enquiry")
    p_delete.add_argument("id", type=int)
    p_delete.add_argument("--yes", action="store_true", help="skip the confirmation prompt")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")

    def confirm(message: str) -> bool:
        if args.command == "delete" and args.yes:
            return True
        return input(f"{message} [y/N] ").strip().lower() in {"y", "yes"}

    client = EnquiryAdminClient(args.base_url, confirm=confirm, alert=_alert)

    if args.command == "list":
        client.sort_field = args.sort
        client.sort_direction = args.direction
        client.filter_status = args.status
        client.search_term = args.search
        client.fetch_enquiries()
        if client.error:
            _alert(client.error)
            return 1
        _print_table(client.enquiries)
        return 0

    if args.command == "show":
        try:
            enquiry = client.get_enquiry(args.id)
        except RuntimeError as exc:
            _alert(str(exc))
            return 1
        print(json.dumps(enquiry, indent=2, ensure_ascii=False))
        return 0

    if args.command == "set-status":
        return 0 if client.set_status(args.id, args.status) else 1

    if args.command == "contacted":
        return 0 if client.toggle_contacted(args.id, not args.off) else 1

    if args.command == "delete":
        return 0 if client.delete_enquiry(args.id) else 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
