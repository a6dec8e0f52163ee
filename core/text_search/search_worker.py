# core/text_search/search_worker.py
"""
Search Worker
=============
Runs index rebuilds and searches on a dedicated background thread.

Callers talk to the worker only through messages:

    {"action": "PERFORM_SEARCH", "data": "<search string>"}
    {"action": "UPDATE_SEARCH_INDEX", "data": [<track records>] or "<json>"}

Requests are serviced one at a time in arrival order. Responses carry the
same action; an optional "request_id" on a request is echoed back so a
caller can drop responses it no longer cares about.
"""
import logging
import queue
import threading
from typing import Any, Callable, Dict, Optional
from core.text_search.documents import DecodeError
from core.text_search.index_manager import IndexManager
from core.text_search.query_processor import QueryProcessor
from core.utilities.config_manager import config_manager

logger = logging.getLogger(__name__)

PERFORM_SEARCH = "PERFORM_SEARCH"
UPDATE_SEARCH_INDEX = "UPDATE_SEARCH_INDEX"

Message = Dict[str, Any]

_STOP = object()

class SearchWorker:
    """Message-driven owner of the search index and query evaluation."""

    def __init__(self, index_manager: Optional[IndexManager] = None,
                 query_processor: Optional[QueryProcessor] = None,
                 inbox_size: Optional[int] = None,
                 on_message: Optional[Callable[[Message], None]] = None):
        """
        Args:
            index_manager: Owner of the current index generation
            query_processor: Ranking used for searches
            inbox_size: Maximum queued requests (defaults to config)
            on_message: Called on the worker thread with each response;
                        when omitted responses go to the outbox queue
        """
        self.index_manager = index_manager or IndexManager()
        self.query_processor = query_processor or QueryProcessor()
        self.on_message = on_message
        self._inbox = queue.Queue(maxsize=inbox_size or config_manager.get_inbox_size())
        self._outbox = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._handlers = {
            PERFORM_SEARCH: self._perform_search,
            UPDATE_SEARCH_INDEX: self._update_search_index
        }

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        """Start the worker thread (no-op if it is already running)."""
        if self.is_running:
            return
        self._thread = threading.Thread(target=self._run, name="search-worker", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = 5.0):
        """Finish queued requests, then stop the worker thread."""
        if not self.is_running:
            return
        try:
            self._inbox.put(_STOP, timeout=timeout)
        except queue.Full:
            logger.warning("Search worker did not stop within timeout")
            return
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Search worker did not stop within timeout")
        else:
            self._thread = None

    def post_message(self, message: Message):
        """
        Queue a request without waiting for it to be serviced.

        Raises:
            queue.Full: If the inbox is at capacity
        """
        self._inbox.put_nowait(message)

    def get_message(self, timeout: Optional[float] = None) -> Message:
        """
        Take the next response from the outbox.

        Raises:
            queue.Empty: If no response arrives within the timeout
        """
        return self._outbox.get(timeout=timeout)

    def _run(self):
        while True:
            message = self._inbox.get()
            if message is _STOP:
                break
            response = self.handle_message(message)
            if response is not None:
                self._post_response(response)

    def _post_response(self, response: Message):
        if self.on_message is None:
            self._outbox.put(response)
            return
        try:
            self.on_message(response)
        except Exception:
            logger.exception("Response callback failed")

    def handle_message(self, message: Message) -> Optional[Message]:
        """Service one request and return its response (None for unknown actions)."""
        action = message.get("action") if isinstance(message, dict) else None
        handler = self._handlers.get(action)
        if handler is None:
            logger.warning(f"Ignoring message with unknown action: {action!r}")
            return None

        response = handler(message.get("data"))
        if "request_id" in message:
            response["request_id"] = message["request_id"]
        return response

    def _perform_search(self, search_term: Any) -> Message:
        results = []
        index = self.index_manager.current_index()
        try:
            results = self.query_processor.search(search_term, index)
        except Exception:
            logger.exception(f"Search failed for {search_term!r}")
        return {"action": PERFORM_SEARCH, "data": results}

    def _update_search_index(self, tracks: Any) -> Message:
        try:
            index = self.index_manager.rebuild(tracks)
        except DecodeError as e:
            return {"action": UPDATE_SEARCH_INDEX, "error": str(e)}
        except Exception as e:
            logger.exception("Index rebuild failed")
            return {"action": UPDATE_SEARCH_INDEX, "error": f"Index rebuild failed: {e}"}
        return {
            "action": UPDATE_SEARCH_INDEX,
            "data": {
                "generation": self.index_manager.generation,
                "documents": index.document_count
            }
        }
