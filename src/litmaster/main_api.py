"""HTTP service: accounts, analysis, history and tutor chat.

Usage:
    uvicorn litmaster.main_api:app --reload
"""

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .accounts import auth
from .errors import AccountError, AnalysisFailed, EmptyTextError, ResultNotFound
from .llm.prompts import ANALYSIS_FAILED_NOTICE
from .log import setup_logging, get_logger
from .pipeline.analyzer import Analyzer
from .schemas.analysis import ChatMessage, TextType
from .schemas.user import Role
from .state import AppState
from .store.db import init_db

setup_logging()
logger = get_logger("api")


class RegisterRequest(BaseModel):
    username: str
    password: str
    role: Role = "student"


class LoginRequest(BaseModel):
    username: str
    password: str


class GuestRequest(BaseModel):
    username: str


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    text_type: TextType = Field(TextType.PROSE, alias="textType")


class ChatRequest(BaseModel):
    message: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield

app = FastAPI(title="LitMaster", lifespan=lifespan)


def _require_user(state: AppState):
    if state.user is None:
        raise HTTPException(status_code=401, detail="Not logged in")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/api/auth/register")
def register(body: RegisterRequest):
    if not body.username.strip() or not body.password:
        raise HTTPException(status_code=400, detail="Username and password are required")
    state = AppState.load()
    try:
        user = auth.register(body.username, body.password, role=body.role)
    except AccountError as e:
        raise HTTPException(status_code=409, detail=str(e))
    state.set_user(user)
    logger.info(f"Registered and logged in {user.username}")
    return user.model_dump()


@app.post("/api/auth/login")
def login(body: LoginRequest):
    state = AppState.load()
    try:
        user = auth.login(body.username, body.password)
    except AccountError as e:
        raise HTTPException(status_code=401, detail=str(e))
    state.set_user(user)
    logger.info(f"Logged in {user.username}")
    return user.model_dump()


@app.post("/api/auth/guest")
def guest(body: GuestRequest):
    state = AppState.load()
    try:
        user = auth.guest_user(body.username)
    except AccountError as e:
        raise HTTPException(status_code=400, detail=str(e))
    state.set_user(user)
    return user.model_dump()


@app.post("/api/auth/logout")
def logout():
    AppState.load().clear_user()
    return {"status": "ok"}


@app.get("/api/profile")
def profile():
    state = AppState.load()
    _require_user(state)
    return {"user": state.user.model_dump(), "stats": state.stats(), "badges": state.badges()}


@app.post("/api/analyze")
def analyze(body: AnalyzeRequest):
    state = AppState.load()
    _require_user(state)
    try:
        result = Analyzer(state).analyze(body.text, body.text_type)
    except EmptyTextError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AnalysisFailed:
        raise HTTPException(status_code=502, detail=ANALYSIS_FAILED_NOTICE)
    return result.to_json_dict()


@app.get("/api/history")
def history() -> List[dict]:
    state = AppState.load()
    _require_user(state)
    return [r.to_json_dict() for r in state.history]


@app.get("/api/history/{result_id}")
def open_result(result_id: str):
    state = AppState.load()
    _require_user(state)
    try:
        result = Analyzer(state).open_result(result_id)
    except ResultNotFound:
        raise HTTPException(status_code=404, detail=f"No analysis {result_id}")
    return result.to_json_dict()


@app.post("/api/history/{result_id}/chat")
def chat(result_id: str, body: ChatRequest):
    state = AppState.load()
    _require_user(state)
    analyzer = Analyzer(state)
    try:
        reply: ChatMessage = analyzer.send_chat(result_id, body.message)
    except EmptyTextError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ResultNotFound:
        raise HTTPException(status_code=404, detail=f"No analysis {result_id}")

    transcript: Optional[List[ChatMessage]] = state.get_result(result_id).chat_history
    return {
        "reply": reply.model_dump(by_alias=True),
        "chatHistory": [m.model_dump(by_alias=True) for m in transcript or []],
    }
