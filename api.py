import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from onboarding_access.checklist import compute_access_checklist, generate_short_missing_access_text
from onboarding_access.config import configure_logging, get_settings
from onboarding_access.extract import load_answers
from onboarding_access.sessions import filter_sessions, sort_sessions, summarize_sessions


load_dotenv()
settings = get_settings()
configure_logging(settings.log_level)
log = logging.getLogger("onboarding_access.api")

app = FastAPI(title="Onboarding Access Checklist API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ChecklistRequest(BaseModel):
    answers: Dict[str, Dict[str, Any]] = Field(default_factory=dict)


class SessionIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    status: Optional[str] = None
    current_step: int = 0
    last_saved_at: Optional[str] = None
    created_at: Optional[str] = None
    client_name: Optional[str] = None
    clients: Any = None


class SessionsSummaryRequest(BaseModel):
    sessions: List[SessionIn] = Field(default_factory=list)
    answers: List[Dict[str, Any]] = Field(default_factory=list)
    access_filter: str = "all"


@app.get("/health")
def health():
    return {"status": "ok"}


def _checklist_payload(answers_by_step) -> Dict[str, Any]:
    checklist = compute_access_checklist(answers_by_step)
    payload = checklist.to_dict()
    payload["short_text"] = generate_short_missing_access_text(checklist)
    return payload


@app.post("/checklist")
def checklist(body: ChecklistRequest):
    return _checklist_payload(body.answers)


@app.post("/checklist/upload")
async def checklist_upload(file: UploadFile = File(...)):
    if not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    suffix = Path(file.filename).suffix.lower()
    if suffix not in {".json", ".xlsx"}:
        raise HTTPException(status_code=400, detail="Only JSON or XLSX files are supported.")

    with tempfile.TemporaryDirectory() as tmp_dir:
        answers_path = Path(tmp_dir) / f"answers{suffix}"
        answers_path.write_bytes(await file.read())
        try:
            answers_by_step = load_answers(str(answers_path))
        except ValueError as e:
            log.warning("Could not read uploaded answers %s: %s", file.filename, e)
            raise HTTPException(status_code=400, detail=str(e))

    return _checklist_payload(answers_by_step)


@app.post("/sessions/summary")
def sessions_summary(body: SessionsSummaryRequest):
    sessions = [s.model_dump() for s in body.sessions]
    summaries = summarize_sessions(sessions, body.answers, settings.total_steps)
    try:
        summaries = filter_sessions(sort_sessions(summaries), body.access_filter)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "sessions": [s.to_dict() for s in summaries],
        "total": len(summaries),
    }
