"""Command-line interface for the credit card scanner."""

import asyncio
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Any

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .capture.camera import CameraCapture
from .core.types import CreditCardModel, MergePolicy, ScanOptions
from .ocr.recognizer import PlainTextRecognizer, TextRecognizer, get_recognizer
from .scan.session import ScanSession
from .ui.notifier import notifier
from .utils.config import settings
from .utils.error_handler import CardScannerError
from .utils.log import configure_logging, get_logger

# Configure logging
configure_logging()
logger = get_logger(__name__)

# Rich console
console = Console()

app = typer.Typer(
    name="cardscan",
    help="Credit Card Scanner - read number, holder and expiry from OCR text",
    add_completion=False
)

# Seconds between camera frame submissions
CAMERA_POLL_S = 0.03


@app.callback()
def main_options(
    ctx: typer.Context,
    number: Optional[bool] = typer.Option(None, "--number/--no-number", help="Require the card number"),
    holder: Optional[bool] = typer.Option(None, "--holder/--no-holder", help="Require the holder name"),
    expiry: Optional[bool] = typer.Option(None, "--expiry/--no-expiry", help="Require the expiry date"),
    luhn: Optional[bool] = typer.Option(None, "--luhn/--no-luhn", help="Reject numbers failing the Luhn check"),
    reject_expired: Optional[bool] = typer.Option(None, "--reject-expired/--allow-expired", help="Ignore dates in the past"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Trace matched lines and surface OCR errors"),
    delay_ms: Optional[int] = typer.Option(None, "--delay-ms", min=0, help="Cooldown after each frame (ms)"),
    policy: Optional[MergePolicy] = typer.Option(None, "--policy", help="How repeated readings of a field are merged"),
):
    """Shared scan options; unset flags fall back to CARDSCAN_* settings."""
    ctx.obj = ScanOptions.from_settings(
        settings,
        check_card_number=number,
        check_card_holder=holder,
        check_card_expiry_date=expiry,
        use_luhn_validation=luhn,
        reject_expired=reject_expired,
        debug=debug,
        delay_ms=delay_ms,
        merge_policy=policy,
    )


def show_card(model: CreditCardModel):
    """Render a scanned card as a table."""
    table = Table(title="Scanned Card")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    if model.number:
        table.add_row("Number", model.masked_number)
        table.add_row("Brand", model.brand or "[dim]Unknown[/dim]")
    if model.holder:
        table.add_row("Holder", model.holder)
    if model.expiry:
        table.add_row("Expiry", f"{model.expiry.month:02d}/{model.expiry.year}")

    console.print(table)


def _on_scan(model: CreditCardModel):
    show_card(model)
    notifier.card_scanned(model)


def _build_session(options: ScanOptions, recognizer: TextRecognizer) -> ScanSession:
    try:
        return ScanSession(options=options, recognizer=recognizer, on_scan=_on_scan)
    except CardScannerError as e:
        console.print(f"[red]❌ Invalid options: {e.message}[/red]")
        raise typer.Exit(1)


async def run_frames(session: ScanSession, frames: Iterable[Tuple[Any, Any]]) -> List[CreditCardModel]:
    """Feed frames one after another and collect every emitted card."""
    cards = []
    for frame_id, frame in frames:
        model = await session.submit_frame(frame, frame_id=frame_id)
        if model is not None:
            cards.append(model)
    return cards


async def run_camera(
    session: ScanSession,
    capture: CameraCapture,
    max_frames: Optional[int],
    continuous: bool,
) -> List[CreditCardModel]:
    """Submit live frames without waiting; frames hitting a busy session are dropped."""
    cards: List[CreditCardModel] = []
    pending = set()

    async def submit(frame, frame_id):
        model = await session.submit_frame(frame, frame_id=frame_id)
        if model is not None:
            cards.append(model)

    index = 0
    while max_frames is None or index < max_frames:
        frame = await asyncio.to_thread(capture.read)
        if frame is None:
            break
        task = asyncio.create_task(submit(frame, index))
        pending.add(task)
        task.add_done_callback(pending.discard)
        index += 1
        await asyncio.sleep(CAMERA_POLL_S)
        if cards and not continuous:
            break

    if pending:
        await asyncio.gather(*pending)
    return cards


def _summarize(session: ScanSession, cards: List[CreditCardModel]):
    stats = session.stats
    console.print(f"\n[bold]Scanning Session Complete[/bold]")
    console.print(f"Frames processed: {stats.frames_processed}")
    console.print(f"Frames dropped: {stats.frames_dropped}")
    console.print(f"Lines seen: {stats.lines_seen}")
    console.print(f"Cards scanned: {len(cards)}")
    if stats.recognition_failures:
        console.print(f"[yellow]⚠ Recognition failures: {stats.recognition_failures}[/yellow]")

    if not cards:
        console.print("[red]❌ No complete card found[/red]")
        raise typer.Exit(1)


def _run(coro):
    try:
        return asyncio.run(coro)
    except CardScannerError as e:
        console.print(f"\n[red]❌ {e.message}[/red]")
        logger.error("Scanning error", error=str(e))
        raise typer.Exit(1)


@app.command()
def text(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="OCR text dumps, one frame per file"),
):
    """Scan OCR text dumps; each file holds the lines of one frame."""
    options: ScanOptions = ctx.obj
    session = _build_session(options, PlainTextRecognizer())

    frames = ((str(path), path.read_text(encoding="utf-8")) for path in files)
    cards = _run(run_frames(session, frames))
    _summarize(session, cards)


@app.command()
def images(
    ctx: typer.Context,
    files: List[Path] = typer.Argument(..., exists=True, dir_okay=False, help="Card images, one frame per file"),
):
    """Recognize card images with Tesseract and scan the text."""
    options: ScanOptions = ctx.obj
    try:
        recognizer = get_recognizer("tesseract")
    except CardScannerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    session = _build_session(options, recognizer)
    cards = _run(run_frames(session, ((str(path), path) for path in files)))
    _summarize(session, cards)


@app.command()
def camera(
    ctx: typer.Context,
    camera_index: Optional[int] = typer.Option(None, "--camera", help="Camera index"),
    max_frames: Optional[int] = typer.Option(None, "--max-frames", "-m", min=1, help="Stop after this many frames"),
    continuous: bool = typer.Option(False, "--continuous", help="Keep scanning after the first card"),
):
    """Scan a card held in front of the camera."""
    options: ScanOptions = ctx.obj

    console.print(Panel.fit(
        "[bold blue]Credit Card Scanner[/bold blue]\n"
        "[dim]Hold the card steady in front of the camera, Ctrl+C to stop[/dim]",
        border_style="blue"
    ))

    try:
        recognizer = get_recognizer()
    except CardScannerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    session = _build_session(options, recognizer)
    capture = CameraCapture(camera_index)
    try:
        capture.open()
    except CardScannerError as e:
        console.print(f"[red]❌ {e.message}[/red]")
        raise typer.Exit(1)

    cards: List[CreditCardModel] = []
    try:
        cards = _run(run_camera(session, capture, max_frames, continuous))
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠ Scanning interrupted by user[/yellow]")
    finally:
        capture.release()
        console.print("\n[green]✓ Camera released[/green]")

    _summarize(session, cards)


if __name__ == "__main__":
    app()
