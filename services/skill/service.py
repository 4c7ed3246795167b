"""Skill Service - HTTP endpoint for the voice platform."""
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from ask_sdk_core.exceptions import AskSdkException, SerializationException
from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, Optional
import time

from langlearn.services.audio import AudioPublisher
from langlearn.services.db import DynamoHistoryStore, HistoryStore, InMemoryHistoryStore
from langlearn.services.facts import FactResponder
from langlearn.services.pipeline import TranslationPipeline
from langlearn.services.quiz import QuizEngine
from langlearn.services.skill import LanguageSkill
from langlearn.services.storage import S3AudioStore
from langlearn.services.translate import AmazonTranslateService
from langlearn.services.voice import PollyVoiceService
from langlearn.utils.logger import ServiceLogger
from langlearn.utils.metrics import MetricsCollector
from langlearn.utils.validation import InputValidator

from services.skill import config

app = FastAPI(title="Language Learning Skill Service")

# Initialize logger and metrics
logger = ServiceLogger(config.SERVICE_NAME, log_dir=config.LOG_DIR, level=config.LOG_LEVEL)
metrics = MetricsCollector(config.SERVICE_NAME)
logger.info(f"Skill service starting up on port {config.PORT}")


class PlatformRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str
    requestId: str = ""


class SkillEnvelope(BaseModel):
    """Outer shape of a platform call; the skill reads the rest."""
    model_config = ConfigDict(extra="allow")

    version: str = "1.0"
    request: PlatformRequest


def build_history_store() -> HistoryStore:
    if config.HISTORY_BACKEND == "memory":
        logger.warning("Using in-memory translation history; records are lost on restart")
        return InMemoryHistoryStore()
    return DynamoHistoryStore(config.HISTORY_TABLE, region_name=config.AWS_REGION)


def build_skill() -> LanguageSkill:
    validator = InputValidator()
    history = build_history_store()
    audio = AudioPublisher(
        PollyVoiceService(region_name=config.AWS_REGION, output_format=config.AUDIO_FORMAT),
        S3AudioStore(config.AUDIO_BUCKET, region_name=config.AWS_REGION,
                     url_expires=config.AUDIO_URL_EXPIRES),
        logger,
        metrics,
        key_prefix=config.AUDIO_KEY_PREFIX,
    )
    pipeline = TranslationPipeline(
        validator, AmazonTranslateService(region_name=config.AWS_REGION),
        history, audio, logger, metrics,
    )
    quiz = QuizEngine(validator, history, audio, logger, metrics)
    return LanguageSkill(pipeline, quiz, FactResponder(validator), logger, metrics,
                         skill_id=config.SKILL_ID)


_skill: Optional[LanguageSkill] = None


def get_skill() -> LanguageSkill:
    global _skill
    if _skill is None:
        _skill = build_skill()
    return _skill


@app.post("/skill")
def handle_skill_request(req: SkillEnvelope, skill: LanguageSkill = Depends(get_skill)) -> Dict[str, Any]:
    start_time = time.time()
    metrics.increment("requests_total")
    logger.info(f"Handling {req.request.type} ({req.request.requestId})", request_id=req.request.requestId)

    try:
        result = skill.invoke(req.model_dump(exclude_none=True))
    except SerializationException as e:
        logger.warning(f"Unreadable request envelope: {e}")
        raise HTTPException(status_code=400, detail="Unreadable request envelope")
    except AskSdkException as e:
        logger.warning(f"Rejected request: {e}")
        raise HTTPException(status_code=403, detail="Unknown application id")

    elapsed = time.time() - start_time
    metrics.timing("request_duration", elapsed * 1000)
    logger.info(f"Handled {req.request.type} in {elapsed:.2f}s", duration=elapsed)
    return result


@app.get("/health")
def health():
    return {"status": "ok", "service": config.SERVICE_NAME}


@app.get("/logs")
def get_logs(limit: int = 100):
    """Get recent logs from this service."""
    return logger.get_recent_logs(limit=limit)


@app.get("/metrics")
def get_metrics(period: Optional[int] = None):
    """Get metrics from this service."""
    return metrics.get_all_metrics(time_period_minutes=period)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
