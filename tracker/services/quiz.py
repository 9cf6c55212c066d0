"""Client for the AI quiz generation proxy.

The proxy answers `{items: [{id, prompt, options: [{id, text}],
correctAnswerIndex}]}` but the model behind it is not always obedient, so
the parser also accepts code-fenced JSON, a `questions` key, a bare array,
option lists of plain strings, `{"A": ..., "D": ...}` option maps and
letter answers.
"""
import hashlib
import json
import uuid

import requests
import structlog
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from ..config import (
    AI_CACHE_TTL_SECONDS,
    AI_DAILY_QUOTA,
    AI_DEFAULT_LEVEL,
    AI_MAX_QUESTIONS,
    AI_REQUEST_TIMEOUT_SECONDS,
)
from ..data.repos import consume_quota
from ..errors import QuizDecodeError, QuizUpstreamError, RateLimitExceeded
from ..utils.time import local_day

logger = structlog.get_logger()

OPTION_LETTERS = ("A", "B", "C", "D")


def cache_key(subject, level, count):
    normalized = f"{subject.strip().lower()}|{level.lower()}|{count}"
    return "quiz:" + hashlib.sha256(normalized.encode("utf-8")).hexdigest()


def coerce_index(value, count):
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if 0 <= value < count else 0
    if isinstance(value, str):
        value = value.strip()
        if value.isdigit():
            n = int(value)
            return n if 0 <= n < count else 0
        if value:
            n = ord(value[0].upper()) - ord("A")
            return n if 0 <= n < count else 0
    return 0


def _load(raw):
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")
    if isinstance(raw, str):
        cleaned = raw.replace("```json", "").replace("```", "").strip()
        try:
            return json.loads(cleaned)
        except ValueError:
            raise QuizDecodeError() from None
    return raw


def _item_id(value):
    # keep upstream ids so answers can be traced back
    if value is None or value == "":
        return str(uuid.uuid4())
    return str(value)


def _options(raw):
    """List of (id, text) pairs; id is None where upstream sent none."""
    options = []
    if isinstance(raw, list):
        for item in raw:
            if isinstance(item, str):
                options.append((None, item))
            elif isinstance(item, dict):
                text = item.get("text") or item.get("label") or item.get("option") or ""
                options.append((item.get("id"), str(text)))
    elif isinstance(raw, dict):
        options = [(letter, str(raw[letter])) for letter in OPTION_LETTERS if letter in raw]
    if len(options) < 2:
        options = [(None, "Option A"), (None, "Option B")]
    return options


def _question(q):
    prompt = q.get("prompt") or q.get("question") or ""
    options = _options(q.get("options"))

    index = 0
    for key in ("correctAnswerIndex", "correct", "answerIndex", "answer"):
        if key in q:
            index = coerce_index(q[key], len(options))
            break

    return {
        "id": _item_id(q.get("id")),
        "prompt": str(prompt),
        "options": [{"id": _item_id(oid), "text": text} for oid, text in options],
        "correctAnswerIndex": index,
    }


def parse_quiz(raw):
    data = _load(raw)
    if isinstance(data, dict):
        data = data.get("items", data.get("questions"))
    if not isinstance(data, list):
        raise QuizDecodeError()

    items = [_question(q) for q in data if isinstance(q, dict)]
    if not items:
        raise QuizDecodeError()
    return items


def generate_quiz(user_id, subject, level=None, count=5, now=None):
    subject = (subject or "").strip()
    if not 2 <= len(subject) <= 200:
        raise ValidationError({"subject": "Subject must be between 2 and 200 characters."})
    level = (level or "").strip() or AI_DEFAULT_LEVEL
    count = min(AI_MAX_QUESTIONS, max(1, int(count)))

    key = cache_key(subject, level, count)
    cached = cache.get(key)
    if cached is not None:
        logger.info("quiz_cache_hit", user_id=str(user_id), subject=subject, count=count)
        return cached

    now = now or timezone.now()
    if not consume_quota(user_id, local_day(now), AI_DAILY_QUOTA):
        logger.info("quiz_rate_limited", user_id=str(user_id), limit=AI_DAILY_QUOTA)
        raise RateLimitExceeded()

    headers = {"Content-Type": "application/json"}
    if settings.AI_PROXY_API_KEY:
        headers["Authorization"] = f"Bearer {settings.AI_PROXY_API_KEY}"
        headers["apikey"] = settings.AI_PROXY_API_KEY

    try:
        resp = requests.post(
            settings.AI_PROXY_URL,
            json={"subject": subject, "level": level, "count": count},
            headers=headers,
            timeout=AI_REQUEST_TIMEOUT_SECONDS,
        )
    except requests.RequestException as exc:
        logger.warning("quiz_request_failed", user_id=str(user_id), error=str(exc))
        raise QuizUpstreamError() from exc

    if not resp.ok:
        logger.warning("quiz_upstream_error", user_id=str(user_id), status=resp.status_code)
        raise QuizUpstreamError()

    items = parse_quiz(resp.text)
    cache.set(key, items, AI_CACHE_TTL_SECONDS)
    logger.info("quiz_generated", user_id=str(user_id), subject=subject, count=len(items))
    return items
