"""
FastAPI server for the Mood Detector.

This module implements the HTTP API for analyzing text and reading the
presentation state, plus a Server-Sent Events stream that UI clients render
from. Every state change, including the flourish being hidden, is streamed.
"""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse

from .config import Settings, get_settings
from .flourish import FlourishTimer, LoopScheduler
from .models import AnalyzeRequest, AnalyzeResponse, StateResponse
from .presenter import MoodPresenter
from .sentiment import SentimentScorer, VaderScorer

logger = logging.getLogger(__name__)


def create_presenter(
    scorer: SentimentScorer | None = None, settings: Settings | None = None
) -> MoodPresenter:
    """Build a presenter whose flourish timer follows ``settings``."""
    settings = settings or get_settings()
    timer = FlourishTimer(
        LoopScheduler(),
        delay=settings.flourish_seconds,
        policy=settings.flourish_policy,
    )
    return MoodPresenter(scorer or VaderScorer(), timer=timer)


def create_app(presenter: MoodPresenter) -> FastAPI:
    """
    Create a FastAPI application around the given presenter.

    Args:
        presenter: The MoodPresenter instance to use for the application

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        yield
        # Pending hide callbacks belong to the loop that is shutting down
        presenter.timer.cancel()

    app = FastAPI(
        title="Mood Detector",
        description="Text sentiment to emoji, colour and message",
        version="0.1.0",
        lifespan=lifespan,
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "mood-detector"}

    @app.get("/mood")
    async def get_state() -> StateResponse:
        """
        Get the current presentation state.

        Returns:
            The current state (the idle prompt before any analysis)
        """
        return StateResponse(state=presenter.state)

    @app.post("/mood/analyze")
    async def analyze(request: AnalyzeRequest) -> AnalyzeResponse:
        """
        Analyze text and make its mood the current presentation.

        Args:
            request: The text to analyze

        Returns:
            The presentation for the text and the resulting state
        """
        try:
            presentation = presenter.analyze(request.text)
        except Exception as e:
            logger.exception("Analysis failed")
            raise HTTPException(status_code=500, detail=f"Failed to analyze mood: {str(e)}")
        return AnalyzeResponse(presentation=presentation, state=presenter.state)

    @app.post("/mood/flourish/clear")
    async def clear_flourish() -> StateResponse:
        """Hide the floating emoji immediately."""
        presenter.clear_flourish()
        return StateResponse(state=presenter.state)

    @app.get("/mood/stream")
    async def stream_state() -> StreamingResponse:
        """
        Stream presentation state changes via Server-Sent Events.

        The current state is sent immediately upon connection, followed by
        every subsequent change.

        Returns:
            StreamingResponse with text/event-stream content type
        """

        async def event_generator() -> AsyncGenerator[str, None]:
            """Generate SSE events for state changes."""
            try:
                async with presenter.store.stream() as state_stream:
                    async for state in state_stream:
                        data = json.dumps(state.model_dump(mode="json"), ensure_ascii=False)
                        yield f"data: {data}\n\n"
            except asyncio.CancelledError:
                # Client disconnected
                pass
            except Exception as e:
                logger.exception("State stream failed")
                error_data = json.dumps({"error": str(e)})
                yield f"event: error\ndata: {error_data}\n\n"

        return StreamingResponse(
            event_generator(),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Headers": "*",
            },
        )

    return app


# Default app instance used by ``uvicorn mood_detector.server:app``
app = create_app(create_presenter())


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "mood_detector.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
