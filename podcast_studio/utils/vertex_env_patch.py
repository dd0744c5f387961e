import os
import logging
import tempfile
from typing import Optional

logger = logging.getLogger(__name__)


def patch_vertex_ai_env() -> Optional[str]:
    """
    Hosted environments ship the service account as JSON text in
    VERTEX_AI_SERVICE_ACCOUNT_JSON; write it to a temp file and point
    VERTEX_AI_SERVICE_ACCOUNT_FILE / GOOGLE_APPLICATION_CREDENTIALS at it.
    Returns the file path, or None when there is nothing to patch.
    """
    creds_json = os.getenv("VERTEX_AI_SERVICE_ACCOUNT_JSON")
    if not creds_json:
        return None

    with tempfile.NamedTemporaryFile(delete=False, suffix=".json") as f:
        f.write(creds_json.encode("utf-8"))
        temp_path = f.name

    os.environ["VERTEX_AI_SERVICE_ACCOUNT_FILE"] = temp_path
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = temp_path
    logger.info(f"Service account JSON written to {temp_path}")
    return temp_path
