"""
Assistant panel CLI — `panel` command.

Commands:
  panel chat               Interactive chat panel in the terminal
  panel send <message>     One-shot turn
  panel config <cmd>       Show or change session settings
"""

import asyncio
import logging
from typing import Iterable, Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install assistant-panel[cli]")

from pydantic import ValidationError

from assistant_panel import __version__
from assistant_panel.config import load_settings
from assistant_panel.responder import ScriptedResponder
from assistant_panel.session import ConversationSession


def _make_session(
    timeout: Optional[float] = None,
    policy: Optional[str] = None,
    delay: Optional[float] = None,
    replies: Iterable[str] = (),
) -> ConversationSession:
    try:
        settings = load_settings(reply_timeout=timeout, overlap_policy=policy, reply_delay=delay)
    except ValidationError as e:
        raise click.ClickException(f"Invalid settings: {e}")
    replies = list(replies)
    responder = ScriptedResponder(replies, delay=settings.reply_delay) if replies else None
    return ConversationSession(responder=responder, settings=settings)


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
def main(verbose: bool):
    """Assistant panel — chat with the assistant from your terminal."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# Register subcommands from separate modules
from assistant_panel.cli.chat import chat_cmd, send_cmd
from assistant_panel.cli.config import config

main.add_command(chat_cmd)
main.add_command(send_cmd)
main.add_command(config)


if __name__ == "__main__":
    main()
