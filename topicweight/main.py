"""topicweight — FastAPI application entry point."""

from __future__ import annotations

import logging
from typing import Any, Literal

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from topicweight.backends.ground_news import build_ground_truth
from topicweight.backends.openai import OpenAIBackend
from topicweight.backends.serper import SerperSearch
from topicweight.config import settings
from topicweight.errors import ValidationError
from topicweight.models.analysis import AnalysisRequest, BiasPreference
from topicweight.orchestrator.analyzer import TOPIC_REQUIRED, AnalysisOrchestrator
from topicweight.orchestrator.chat import ChatRelay

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CALCULATE_FAILED = "Failed to calculate topic weight."
CHAT_FAILED = "Failed to generate a reply."
INVALID_BODY = "Invalid request body."

app = FastAPI(
    title="topicweight",
    description="Research-time allocation for political topics",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Request / Response models ---


class CalculateWeightRequest(BaseModel):
    topic: str | None = None
    personalImpact: str | None = None
    biasPreference: Literal["left", "right", "neutral"] | None = None
    year: int | None = None
    daysPerYear: float | None = None

    def to_analysis_request(self) -> AnalysisRequest:
        return AnalysisRequest(
            topic=self.topic,
            days_per_year=self.daysPerYear,
            personal_impact=self.personalImpact,
            bias_preference=BiasPreference(self.biasPreference) if self.biasPreference else None,
            year=self.year,
        )


class CalculateWeightResponse(BaseModel):
    weights: list[dict]
    totalHours: int
    totalHoursDescription: str
    analysisContext: str
    sources: list[dict]


class ChatRequest(BaseModel):
    conversation: Any = None
    analysisContext: Any = None


class ChatResponse(BaseModel):
    reply: str


# --- Dependencies ---


def get_orchestrator() -> AnalysisOrchestrator:
    return AnalysisOrchestrator(
        generator=OpenAIBackend(),
        search=SerperSearch(),
        ground_truth=build_ground_truth(),
    )


def get_chat_relay() -> ChatRelay:
    return ChatRelay(OpenAIBackend())


# --- Error handling ---


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed body on %s: %s", request.url.path, exc.errors())
    # A missing topic outranks type errors elsewhere in the body
    if request.url.path == "/calculate-weight" and not _has_topic(exc.body):
        return JSONResponse(status_code=400, content={"error": TOPIC_REQUIRED})
    return JSONResponse(status_code=400, content={"error": INVALID_BODY})


def _has_topic(body) -> bool:
    if not isinstance(body, dict):
        return False
    topic = body.get("topic")
    if topic is None:
        return False
    return not isinstance(topic, str) or bool(topic.strip())


# --- Routes ---


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.post("/calculate-weight", response_model=CalculateWeightResponse)
async def calculate_weight(
    req: CalculateWeightRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    """Weigh a topic across categories and recommend research hours."""
    try:
        response = await orchestrator.handle(req.to_analysis_request())
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception:
        logger.exception("Topic weight calculation failed")
        return JSONResponse(status_code=500, content={"error": CALCULATE_FAILED})

    return response.to_dict()


@app.post("/chat", response_model=ChatResponse)
async def chat(req: ChatRequest, relay: ChatRelay = Depends(get_chat_relay)):
    """Answer a follow-up question using a previous analysis as context."""
    try:
        reply = await relay.reply(req.conversation, req.analysisContext)
    except ValidationError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception:
        logger.exception("Chat relay failed")
        return JSONResponse(status_code=500, content={"error": CHAT_FAILED})

    return ChatResponse(reply=reply)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("topicweight.main:app", host=settings.host, port=settings.port)
