#!/usr/bin/env python3

from services.chat import ChatSession
from logger import get_logger

logger = get_logger()

EXIT_COMMANDS = ("quit", "exit")


def cmd_chat(args, services):
    """Run an interactive support chat until the user quits."""
    session = ChatSession(services.chat)
    print(f"\nAssistant: {session.messages[0].text}")
    print("(type 'quit' to leave)")

    while True:
        try:
            text = input("\nYou: ").strip()
        except EOFError:
            break

        if text.lower() in EXIT_COMMANDS:
            break

        answer = session.send(text)
        if answer is not None:
            print(f"\nAssistant: {answer.text}")

    logger.debug(f"Chat ended after {len(session.messages)} message(s)")


def setup_parser(subparsers):
    """Setup chat subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "chat",
        help="Talk to the support assistant",
        description="Ask questions about products, sizing, shipping and returns",
    )
    parser.set_defaults(func=cmd_chat)
