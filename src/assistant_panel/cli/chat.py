"""CLI: panel chat, panel send"""

from typing import Optional

import click
from rich.align import Align
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from assistant_panel.errors import EmptyInputError, SubmissionError
from assistant_panel.models.events import SessionEvent
from assistant_panel.models.message import Message
from assistant_panel.presentation import SUGGESTION_BADGE, avatar_initials, caption, is_suggestion
from assistant_panel.session import PanelEvent

console = Console()


def _make_session(**kwargs):
    from assistant_panel.cli.main import _make_session
    return _make_session(**kwargs)


def _run(coro):
    from assistant_panel.cli.main import _run
    return _run(coro)


def render_message(message: Message) -> RenderableType:
    if message.kind == "code":
        body: RenderableType = Syntax(message.content, "text", word_wrap=True)
    else:
        body = Text(message.content)
    if message.sender == "user":
        style = "blue"
    elif is_suggestion(message):
        style = "green"
    else:
        style = "magenta"
    title = f"[bold]{avatar_initials(message)}[/bold]"
    if is_suggestion(message):
        title += f" [green]✓ {SUGGESTION_BADGE}[/green]"
    bubble = Panel(
        body, title=title, title_align="left", subtitle=caption(message),
        border_style=style, expand=False,
    )
    return Align.right(bubble) if message.sender == "user" else bubble


def _printer(event: PanelEvent) -> None:
    if event.type == SessionEvent.MESSAGE:
        console.print(render_message(event.data))
    elif event.type == SessionEvent.REPLY_FAILED:
        console.print(f"[red]Assistant unavailable: {event.data['message']}[/red]")


@click.command("chat")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for a reply")
@click.option("--delay", type=float, default=None, help="Stub responder delay in seconds")
def chat_cmd(timeout: Optional[float], delay: Optional[float]):
    """Interactive chat with the assistant."""

    async def _chat():
        session = _make_session(timeout=timeout, delay=delay)
        session.add_event_handler(_printer)
        console.print("[cyan]Type your message (/new for a new chat, /quit to exit)[/cyan]\n")
        try:
            while True:
                text = click.prompt("You", prompt_suffix=": ", default="", show_default=False)
                command = text.strip().lower()
                if command in ("/quit", "/exit"):
                    break
                if command == "/new":
                    await session.aclose()
                    session = _make_session(timeout=timeout, delay=delay)
                    session.add_event_handler(_printer)
                    console.print("[dim]New chat started.[/dim]")
                    continue
                if command == "/history":
                    for message in session.current_transcript():
                        console.print(render_message(message))
                    continue
                try:
                    session.submit(text)
                except EmptyInputError:
                    continue
                except SubmissionError as e:
                    console.print(f"[yellow]{e}[/yellow]")
                    continue
                with console.status("Assistant is typing..."):
                    await session.wait_idle()
        except (click.Abort, KeyboardInterrupt, EOFError):
            pass
        finally:
            await session.aclose()

    _run(_chat())


@click.command("send")
@click.argument("message")
@click.option("-r", "--reply", "replies", multiple=True, help="Scripted assistant reply (repeatable)")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for a reply")
@click.option("--delay", type=float, default=None, help="Responder delay in seconds")
@click.option("--json-output", "--json", is_flag=True)
def send_cmd(message: str, replies: tuple[str, ...], timeout: Optional[float], delay: Optional[float], json_output: bool):
    """Send a one-shot message and print the reply."""

    async def _send():
        session = _make_session(timeout=timeout, delay=delay, replies=replies)
        async with session:
            try:
                session.submit(message)
            except SubmissionError as e:
                raise click.ClickException(str(e))
            await session.wait_idle()
            return session.snapshot(), session.last_error

    snapshot, error = _run(_send())
    if json_output:
        click.echo(snapshot.model_dump_json(indent=2))
    else:
        for msg in snapshot.messages:
            if msg.sender == "assistant":
                console.print(render_message(msg))
    if error is not None:
        if not json_output:
            console.print(f"[red]Assistant unavailable: {error}[/red]")
        raise SystemExit(1)
