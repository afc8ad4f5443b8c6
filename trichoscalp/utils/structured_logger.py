import json
import logging
import time
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def _payload(event: str, endpoint: str, client_id: Optional[str], evaluation_id: Optional[str]) -> Dict[str, Any]:
    return {
        "event": event,
        "endpoint": endpoint,
        "client_id": client_id,
        "evaluation_id": evaluation_id,
    }


def request_start(endpoint: str, client_id: Optional[str] = None, evaluation_id: Optional[str] = None, **additional_fields: Any) -> float:
    """
    Emit a structured request_start log and return the start_time (epoch seconds) for duration calculation.
    """
    start_time = time.time()
    payload = _payload("request_start", endpoint, client_id, evaluation_id)
    if additional_fields:
        payload.update(additional_fields)
    logger.info(json.dumps(payload, default=str))
    return start_time


def request_end(endpoint: str, start_time: float, client_id: Optional[str] = None, evaluation_id: Optional[str] = None, http_status: int = 200, **additional_fields: Any) -> None:
    """
    Emit a structured request_end log with response_time_ms.
    """
    payload = _payload("request_end", endpoint, client_id, evaluation_id)
    payload["http_status"] = http_status
    payload["response_time_ms"] = int((time.time() - start_time) * 1000)
    if additional_fields:
        payload.update(additional_fields)
    logger.info(json.dumps(payload, default=str))


def request_error(endpoint: str, start_time: float, client_id: Optional[str] = None, evaluation_id: Optional[str] = None, http_status: int = 500, error: Optional[str] = None, **additional_fields: Any) -> None:
    """
    Emit a structured request_error log with response_time_ms and error message.
    """
    payload = _payload("request_error", endpoint, client_id, evaluation_id)
    payload["http_status"] = http_status
    payload["response_time_ms"] = int((time.time() - start_time) * 1000)
    if error is not None:
        payload["error"] = error
    if additional_fields:
        payload.update(additional_fields)
    # Use warning for 4xx, error for 5xx
    if 400 <= http_status < 500:
        logger.warning(json.dumps(payload, default=str))
    else:
        logger.error(json.dumps(payload, default=str))
