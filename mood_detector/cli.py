"""
Command-line interface tools for the Mood Detector.
"""

import asyncio
import json
from collections.abc import Coroutine
from datetime import datetime
from typing import Any

import httpx
import typer
from httpx_sse import ServerSentEvent, aconnect_sse

from .config import get_settings
from .models import AnalyzeResponse, MoodPresentation, PresentationState
from .presenter import MoodPresenter
from .sentiment import VaderScorer

DEFAULT_BASE_URL = get_settings().base_url

app = typer.Typer(help="Mood Detector CLI tools")


# MARK: - CLI Entry Points


def cli_analyze() -> None:
    """Entry point for mood-analyze CLI command."""
    typer.run(analyze)


def cli_get_state() -> None:
    """Entry point for mood-get CLI command."""
    typer.run(get_state)


def cli_stream() -> None:
    """Entry point for mood-stream CLI command."""
    typer.run(stream)


# MARK: - Commands


@app.command()
def analyze(
    text: str = typer.Argument(..., help="The text to analyze"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Detector service"
    ),
    local: bool = typer.Option(
        False, "--local", "-l", help="Analyze in-process instead of calling the service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Analyze the mood of a piece of text."""
    if local:
        presentation = _analyze_locally(text)
        if json_output:
            print(json.dumps(presentation.model_dump(mode="json"), indent=2, ensure_ascii=False))
        else:
            print(_format_presentation(presentation))
        return

    async def _analyze() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(f"{base_url}/mood/analyze", json={"text": text})
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            parsed = AnalyzeResponse.model_validate(result)
            print(_format_presentation(parsed.presentation))

    _run_with_error_handling(_analyze(), base_url)


@app.command("get")
def get_state(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Detector service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Get the current presentation state from the service."""

    async def _get_state() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/mood")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            state = PresentationState.model_validate(result["state"])
            print(_format_state(state))

    _run_with_error_handling(_get_state(), base_url)


@app.command()
def stream(
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Mood Detector service"
    ),
) -> None:
    """Stream presentation state changes in real-time."""

    async def _stream() -> None:
        print(f"Streaming from {base_url}/mood/stream... (Ctrl+C to stop)")

        async with httpx.AsyncClient(timeout=None) as client:
            async with aconnect_sse(
                client, "GET", f"{base_url}/mood/stream"
            ) as event_source:
                async for sse in event_source.aiter_sse():
                    _handle_sse_event(sse)

    _run_with_error_handling(_stream(), base_url)


@app.command()
def serve() -> None:
    """Run the Mood Detector service."""
    from .server import main

    main()


# MARK: - Private Helpers


def _analyze_locally(text: str) -> MoodPresentation:
    """Run the presenter in-process; the flourish is irrelevant here."""

    async def _analyze() -> MoodPresentation:
        presenter = MoodPresenter(VaderScorer())
        presentation = presenter.analyze(text)
        presenter.timer.cancel()
        return presentation

    return asyncio.run(_analyze())


def _format_presentation(presentation: MoodPresentation) -> str:
    return f"{presentation.emoji}  {presentation.message}"


def _format_state(state: PresentationState) -> str:
    """Format state with optional timestamp and flourish marker."""
    line = _format_presentation(state.presentation)
    if state.show_flourish:
        line += " ✨"
    if not state.timestamp:
        return line

    dt = datetime.fromtimestamp(state.timestamp)
    timestamp = dt.strftime("%H:%M:%S")
    return f"{timestamp} > {line}"


def _handle_sse_event(sse: ServerSentEvent) -> None:
    """Handle a single SSE event."""
    try:
        if sse.event == "error":
            error_data = json.loads(sse.data)
            print(f"Server error: {error_data.get('error', 'Unknown error')}")
            return

        raw_data = json.loads(sse.data)

        # Handle error events that come as data
        if "error" in raw_data:
            print(f"Server error: {raw_data['error']}")
            return

        state = PresentationState.model_validate(raw_data)
        print(_format_state(state))

    except json.JSONDecodeError as e:
        print(f"Warning: Could not parse SSE data: {sse.data} - {e}")
    except Exception as e:
        print(f"Warning: Error processing state data: {e}")


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
