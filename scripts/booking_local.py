from __future__ import annotations

#!/usr/bin/env python3
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

"""
Interactive local booking funnel harness (no HTTP).

Usage:
  python3 scripts/booking_local.py [--session-id bk_...] [--query "utm_source=google"]

What it does:
- Starts (or restores) a booking session through the same wiring as the API
- Applies funnel actions typed as commands
- Prints the step, step gate, recommendations and price breakdown after each action
"""

import argparse
import shlex

from app.application.exceptions import SessionNotFoundError
from app.application.use_cases.booking_session import BookingSession
from app.domain.entities.booking_form import FormDataUpdate, PropertyAddress
from app.wiring.dependencies import get_session_manager

HELP = """Commands:
  /package <key> <tier>       select package and size tier (e.g. /package signature lt2000)
  /addon <id>                 toggle an addon
  /qty <id> <n>               set addon quantity (0 removes)
  /address <street> <city> <zip>
  /schedule <YYYY-MM-DD> <HH:MM>
  /contact <name> <email> <phone>
  /coupon <code> <discount> <percent|fixed>   |  /nocoupon
  /loyalty <points> <value>
  /travel <fee> <distance> <duration>
  /next  /prev  /abandon  /reset  /quit"""


def _print_state(session: BookingSession) -> None:
    pricing = session.pricing
    print("\n--- Session ---")
    print(f"session_id: {session.session_id}")
    print(f"step: {session.current_step} ({session.progress().progress:.0f}%)  can_proceed: {session.can_proceed()}")
    if session.recommended_addons:
        print(f"recommended: {', '.join(session.recommended_addons)}")
    print("\n--- Quote ---")
    for line in pricing.breakdown:
        qty = f" x{line.quantity}" if line.quantity else ""
        print(f"  {line.name}{qty}: {line.price:,.2f}")
    print(f"  subtotal: {pricing.subtotal:,.2f}")
    print(f"  total: {pricing.total:,.2f}")
    print("-" * 60)


def _apply(session: BookingSession, cmd: str, args: list[str]) -> None:
    if cmd == "/package":
        session.set_package(args[0], args[1] if len(args) > 1 else "lt2000")
    elif cmd == "/addon":
        session.toggle_addon(args[0])
    elif cmd == "/qty":
        session.set_addon_quantity(args[0], int(args[1]))
    elif cmd == "/address":
        session.set_property_address(PropertyAddress(street=args[0], city=args[1], state="FL", zip=args[2]))
    elif cmd == "/schedule":
        session.set_schedule(args[0], args[1])
    elif cmd == "/contact":
        session.update_form_data(FormDataUpdate(contact_name=args[0], contact_email=args[1], contact_phone=args[2]))
    elif cmd == "/coupon":
        session.apply_coupon(args[0], float(args[1]), args[2])
    elif cmd == "/nocoupon":
        session.remove_coupon()
    elif cmd == "/loyalty":
        session.set_loyalty_points(int(args[0]), float(args[1]))
    elif cmd == "/travel":
        session.set_travel_fee(float(args[0]), float(args[1]), float(args[2]))
    elif cmd == "/next":
        if not session.can_proceed():
            print("(step incomplete, staying put)")
            return
        session.next_step()
    elif cmd == "/prev":
        session.prev_step()
    elif cmd == "/abandon":
        session.mark_as_abandoned()
    else:
        print(f"Unknown command: {cmd}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Local booking funnel harness")
    parser.add_argument("--session-id", help="restore a saved session")
    parser.add_argument("--query", default="", help="landing page query string (UTM capture)")
    opts = parser.parse_args()

    manager = get_session_manager()
    if opts.session_id:
        try:
            session = manager.get(opts.session_id)
        except SessionNotFoundError as e:
            print(e)
            return
    else:
        session = manager.create(opts.query)

    print("\nLocal Booking Harness")
    print(HELP)
    _print_state(session)

    while True:
        try:
            user_text = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not user_text:
            continue

        parts = shlex.split(user_text)
        cmd, args = parts[0].lower(), parts[1:]
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
            continue
        if cmd == "/reset":
            manager.discard(session.session_id)
            session = manager.create(opts.query)
            _print_state(session)
            continue

        try:
            _apply(session, cmd, args)
        except (IndexError, ValueError) as e:
            print(f"ERROR: {e}")
            continue
        _print_state(session)


if __name__ == "__main__":
    main()
