"""Skill Service Configuration."""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file from service directory
service_dir = Path(__file__).parent
env_file = service_dir / ".env"
if env_file.exists():
    load_dotenv(env_file)

# Service Configuration
PORT = int(os.getenv("PORT", "8020"))
SERVICE_NAME = os.getenv("SERVICE_NAME", "skill")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR = os.getenv("LOG_DIR", "logs")

# Requests whose application id differs are rejected; empty disables the check
SKILL_ID = os.getenv("SKILL_ID", "")

# AWS Configuration
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
HISTORY_BACKEND = os.getenv("HISTORY_BACKEND", "dynamodb")  # 'dynamodb' or 'memory'
HISTORY_TABLE = os.getenv("HISTORY_TABLE", "AlexaLanguageLearn-QuizTable")
AUDIO_BUCKET = os.getenv("AUDIO_BUCKET", "alexalanguagelearn-bucket")
AUDIO_KEY_PREFIX = os.getenv("AUDIO_KEY_PREFIX", "audio/")
AUDIO_URL_EXPIRES = int(os.getenv("AUDIO_URL_EXPIRES", "3600"))
AUDIO_FORMAT = os.getenv("AUDIO_FORMAT", "mp3")
