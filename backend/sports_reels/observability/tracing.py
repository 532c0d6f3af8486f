"""
Langfuse tracing hooks for LLM calls (v3 SDK).

A single env-configured client is created lazily and shared; callback
handlers are built per call so each trace carries its own metadata.
"""

import threading
from typing import Any, Dict, List, Optional
from langfuse import Langfuse
from langfuse.langchain import CallbackHandler
from sports_reels.core import config
from sports_reels.core.logging import get_logger

logger = get_logger(__name__)

_client: Optional[Langfuse] = None
_client_lock = threading.Lock()


def tracing_enabled() -> bool:
    return bool(config.LANGFUSE_ENABLED and config.LANGFUSE_PUBLIC_KEY and config.LANGFUSE_SECRET_KEY)


def get_langfuse_client() -> Optional[Langfuse]:
    """
    Get or create the cached Langfuse client.

    Returns None when tracing is disabled or the client cannot be created.
    """
    global _client
    if not tracing_enabled():
        return None

    with _client_lock:
        if _client is not None:
            return _client
        try:
            _client = Langfuse(
                public_key=config.LANGFUSE_PUBLIC_KEY,
                secret_key=config.LANGFUSE_SECRET_KEY,
                host=config.LANGFUSE_BASE_URL,
            )
            logger.debug("Created Langfuse client")
        except Exception as e:
            logger.error(f"Failed to create Langfuse client: {e}", exc_info=True)
            _client = None
        return _client


def get_callback_handler() -> Optional[CallbackHandler]:
    """LangChain callback handler bound to the shared client, or None."""
    if get_langfuse_client() is None:
        return None
    try:
        return CallbackHandler(public_key=config.LANGFUSE_PUBLIC_KEY)
    except Exception as e:
        logger.error(f"Failed to create CallbackHandler: {e}", exc_info=True)
        return None


def build_run_config(run_name: str, user_id: Optional[int] = None,
                     metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    LangChain invoke config with tracing callbacks and trace attributes.

    Args:
        run_name: Name shown for the trace
        user_id: Optional user ID attached to the trace
        metadata: Optional extra attributes; None values are dropped

    Returns:
        Dict suitable for `llm.invoke(messages, config=...)`
    """
    callbacks: List[CallbackHandler] = []
    handler = get_callback_handler()
    if handler:
        callbacks.append(handler)

    trace_metadata: Dict[str, Any] = {}
    if user_id is not None:
        trace_metadata['langfuse_user_id'] = str(user_id)
    for key, value in (metadata or {}).items():
        if value is None:
            continue
        trace_metadata[str(key)] = value if isinstance(value, str) else str(value)

    return {
        'run_name': run_name,
        'callbacks': callbacks,
        'metadata': trace_metadata,
    }


def cleanup_client():
    """
    Flush and shutdown the cached Langfuse client.

    Call this during application shutdown.
    """
    global _client
    with _client_lock:
        if _client is None:
            return
        try:
            _client.flush()
            _client.shutdown()
            logger.debug("Shutdown Langfuse client")
        except Exception as e:
            logger.warning(f"Error during Langfuse client cleanup: {e}")
        finally:
            _client = None
