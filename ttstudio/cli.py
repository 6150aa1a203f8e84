"""
ttstudio CLI - Command line interface for speech synthesis.

Usage:
    ttstudio --help                           Show all commands
    ttstudio synthesize story.txt -v en-US-AriaNeural
    ttstudio chunks story.txt                 Show how text will be chunked
    ttstudio voices --lang en --gender Female List voices
    ttstudio preview en-GB-RyanNeural         Write a short voice sample
    ttstudio serve                            Start the API server
"""

import asyncio
from pathlib import Path

import typer

from ttstudio.config import get_config, get_settings
from ttstudio.core.errors import TTSError
from ttstudio.core.logging import setup_logging

app = typer.Typer(
    name="ttstudio",
    help="ttstudio CLI - Text-to-speech with subtitles",
    no_args_is_help=True,
)


# --- Step printer helpers ---


def _print_step(step_num: int, total: int, message: str) -> None:
    """Print a step progress message."""
    typer.echo(f"[{step_num}/{total}] {message}")


def _print_success(message: str) -> None:
    """Print a success message."""
    typer.echo(f"  ✅ {message}")


def _print_error(message: str) -> None:
    """Print an error message to stderr."""
    typer.echo(f"❌ {message}", err=True)


def _read_text(source: str) -> str:
    """Treat source as a file path when it exists, otherwise as literal text."""
    path = Path(source)
    if path.is_file():
        return path.read_text(encoding="utf-8")
    return source


@app.command()
def synthesize(
    source: str = typer.Argument(..., help="Text to speak, or a path to a UTF-8 text file"),
    voice: str | None = typer.Option(None, "--voice", "-v", help="Voice short name"),
    speed: float = typer.Option(1.0, "--speed", "-s", min=0.5, max=2.0, help="Speed multiplier"),
    output: Path = typer.Option(Path("speech.mp3"), "--output", "-o", help="MP3 output path"),
    srt: Path | None = typer.Option(
        None, "--srt", help="SRT output path (defaults to the audio path with .srt)"
    ),
    word_boundaries: bool = typer.Option(
        True,
        "--word-boundaries/--no-word-boundaries",
        help="Use engine word timings, or estimate subtitle timing",
    ),
):
    """Synthesize text to MP3 with an aligned SRT subtitle file."""
    from ttstudio.api.tts import validate_synthesis_request
    from ttstudio.schemas.tts import TTSRequest
    from ttstudio.tts.orchestrator import get_orchestrator
    from ttstudio.tts.timing import write_srt
    from ttstudio.tts.utils import get_synthesis_adapter, map_speed_to_rate

    setup_logging()
    settings = get_settings()
    request = TTSRequest(text=_read_text(source), voice=voice or settings.default_voice, speed=speed)

    try:
        text, voice_name = validate_synthesis_request(request, settings.max_text_length)
    except TTSError as e:
        _print_error(e.message)
        raise typer.Exit(1) from e

    orchestrator = get_orchestrator(get_synthesis_adapter(word_boundaries=word_boundaries))
    rate = map_speed_to_rate(speed)

    def on_progress(progress) -> None:
        _print_step(progress.current, progress.total, f"Chunk synthesized ({progress.percent}%)")

    try:
        result = asyncio.run(orchestrator.run(text, voice_name, rate, on_progress=on_progress))
    except TTSError as e:
        _print_error(e.message)
        raise typer.Exit(1) from e

    srt_path = srt or output.with_suffix(".srt")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.audio)
    write_srt(result.cues, srt_path)

    _print_success(f"Audio: {output} ({result.duration_ms / 1000:.1f}s, {result.chunk_count} chunks)")
    _print_success(f"Subtitles: {srt_path} ({len(result.cues)} cues, {result.timing_mode} timing)")


@app.command()
def chunks(
    source: str = typer.Argument(..., help="Text, or a path to a UTF-8 text file"),
    max_chunk_size: int | None = typer.Option(
        None, "--max-chunk-size", "-m", min=1, help="Override config.yml tts.max_chunk_size"
    ),
):
    """Show how text will be split for synthesis."""
    from ttstudio.tts.chunker import build_chunks

    size = max_chunk_size or get_config().tts.max_chunk_size
    pieces = build_chunks(_read_text(source), size)

    typer.echo(f"{len(pieces)} chunk(s), max {size} characters")
    for chunk in pieces:
        preview = chunk.text[:60].replace("\n", " ")
        typer.echo(f"  {chunk.index + 1:>3}. {len(chunk.text):>5} chars  {preview}")


@app.command()
def voices(
    lang: str | None = typer.Option(None, "--lang", "-l", help="Locale prefix (en, en-GB)"),
    gender: str | None = typer.Option(None, "--gender", "-g", help="Male, Female or all"),
):
    """List available voices."""
    from ttstudio.tts.voices import get_voice_catalog

    setup_logging()
    catalog = get_voice_catalog()

    try:
        matches = asyncio.run(catalog.filter_voices(lang, gender))
    except TTSError as e:
        _print_error(e.message)
        raise typer.Exit(1) from e

    for v in matches:
        typer.echo(f"{v.short_name:<40} {v.locale:<10} {v.gender:<8} {v.friendly_name}")
    typer.echo(f"\n{len(matches)} voice(s)")


@app.command()
def preview(
    voice: str = typer.Argument(..., help="Voice short name"),
    output: Path = typer.Option(Path("preview.mp3"), "--output", "-o", help="MP3 output path"),
):
    """Write a short sample of a voice in its own language."""
    from ttstudio.tts.utils import get_synthesis_adapter
    from ttstudio.tts.voices import get_preview_text, get_voice_catalog

    setup_logging()

    async def run() -> bytes:
        locale = await get_voice_catalog().preview_locale(voice)
        adapter = get_synthesis_adapter(word_boundaries=False)
        result = await adapter.synthesize_chunk(get_preview_text(locale), voice, "+0%")
        return result.audio

    try:
        audio = asyncio.run(run())
    except TTSError as e:
        _print_error(e.message)
        raise typer.Exit(1) from e

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(audio)
    _print_success(f"Preview: {output}")


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable hot reload"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
):
    """Start the API server."""
    import subprocess

    cmd = ["uvicorn", "ttstudio.main:app", "--host", "0.0.0.0", "--port", str(port)]
    if reload:
        cmd.append("--reload")

    subprocess.run(cmd, check=False)


if __name__ == "__main__":
    app()
