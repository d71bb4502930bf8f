"""
pos_client/main.py - Terminal POS client

USAGE:
    pos-client                      # or: python -m pos_client
    POS_CLIENT_API_URL=http://localhost:3000 pos-client

COMMANDS:
    <product id>   add one unit of the product to the cart
    s, submit      submit the cart as an order
    c, cart        show the cart again
    p, products    show the product list again
    h, help        show this list
    q, quit        leave (end of input does the same)
"""

import asyncio
import logging
import sys
from typing import Callable, Optional

from pos_client.config import ClientSettings
from pos_client.session import PosSession, build_session
from shared.logging_config import setup_logging

logger = logging.getLogger(__name__)

HELP_TEXT = "Commands: <product id> add | s submit | c cart | p products | h help | q quit"

InputFn = Callable[[str], str]


def handle_command(session: PosSession, line: str) -> bool:
    """Turn one input line into session actions. Returns False to stop reading."""
    command = line.strip().lower()
    if not command:
        return True
    if command.isdigit():
        session.select(int(command))
    elif command in ("s", "submit"):
        session.submit()
    elif command in ("c", "cart"):
        session.display.render_cart(session.cart)
    elif command in ("p", "products"):
        session.display.render_catalog(session.catalog)
    elif command in ("h", "help"):
        session.display.show_message(HELP_TEXT)
    elif command in ("q", "quit"):
        return False
    else:
        session.display.show_message(f"Unknown command: {line.strip()}")
    return True


async def read_commands(session: PosSession, input_fn: InputFn = input) -> None:
    """Feed input lines to the session until quit or end of input.

    However reading stops, the session is asked to quit so run() returns.
    """
    try:
        while True:
            try:
                line = await asyncio.to_thread(input_fn, "> ")
            except EOFError:
                return
            if not handle_command(session, line):
                return
    finally:
        session.quit()


async def run_client(settings: ClientSettings, input_fn: InputFn = input) -> None:
    session = build_session(settings)
    try:
        await session.start()
        session.display.show_message(HELP_TEXT)
        reader = asyncio.create_task(read_commands(session, input_fn))
        await session.run()
        await reader
    finally:
        await session.close()


def main(settings: Optional[ClientSettings] = None) -> None:
    settings = settings or ClientSettings()
    # stdout belongs to the display
    setup_logging("pos-client", level=settings.log_level, tz_name=settings.log_timezone, stream=sys.stderr)
    try:
        asyncio.run(run_client(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
