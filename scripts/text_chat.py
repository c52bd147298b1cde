#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import sys
import uuid
from typing import Any

import httpx


def _print_extras(data: dict[str, Any]) -> None:
    rule = data.get("rule")
    state = data.get("state") or {}
    print(f"(rule: {rule} state={json.dumps(state, ensure_ascii=False)})")

    for key in ("missing", "dependencies", "tool_call"):
        value = data.get(key)
        if value:
            print(f"({key}: {json.dumps(value, ensure_ascii=False)})")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive text-only chat with the painting lead assistant via /lead/turn")
    parser.add_argument("--base-url", default="http://localhost:8000", help="API base URL (default: http://localhost:8000)")
    parser.add_argument("--conversation-id", default=None, help="Conversation id to use (default: random)")
    parser.add_argument("--contractor-id", default=None, help="Contractor id attached to captured leads")
    parser.add_argument("--project", action="store_true", help="Talk to the /project/turn questionnaire instead")
    parser.add_argument("--timeout", type=float, default=45.0, help="HTTP timeout seconds (default: 45)")
    args = parser.parse_args(argv)

    base_url = args.base_url.rstrip("/")
    conversation_id = args.conversation_id or f"cli-{uuid.uuid4().hex[:8]}"

    print(f"Text chat started (conversation {conversation_id}). Type /exit to quit.")
    if args.project:
        print("Tip: send /project to start the questionnaire.")

    with httpx.Client(timeout=args.timeout) as client:
        while True:
            try:
                user_text = input("you> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break

            if not user_text:
                continue
            if user_text.lower() in {"/exit", "/quit", "exit", "quit"}:
                break

            if args.project:
                url = f"{base_url}/project/turn"
                req = {"chat_id": conversation_id, "text": user_text}
            else:
                url = f"{base_url}/lead/turn"
                req = {
                    "conversation_id": conversation_id,
                    "text": user_text,
                    "contractor_id": args.contractor_id,
                }

            try:
                resp = client.post(url, json=req)
                resp.raise_for_status()
                data = resp.json()
            except httpx.HTTPStatusError as e:
                body = e.response.text
                print(f"error> HTTP {e.response.status_code}: {body}")
                continue
            except httpx.HTTPError as e:
                print(f"error> {e}")
                continue

            if args.project:
                reply = (data.get("reply_text") or "").strip()
                print(f"bot> {reply}" if reply else "bot> (no reply)")
                if data.get("save_payload"):
                    print(f"(save: {json.dumps(data['save_payload'], ensure_ascii=False)})")
                continue

            reply = (data.get("reply") or "").strip()
            print(f"bot> {reply}" if reply else "bot> (empty response)")
            _print_extras(data)

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
