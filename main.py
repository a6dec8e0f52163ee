# main.py
import argparse
import logging
import queue
import sys
import time
from pathlib import Path
from config import VERSION
from core.text_search.search_worker import SearchWorker, PERFORM_SEARCH, UPDATE_SEARCH_INDEX
from core.utilities.config_manager import config_manager
from ui.cli.console_utils import print_header, format_elapsed_time, format_results

RESPONSE_TIMEOUT = 300  # seconds

def wait_for(worker: SearchWorker, request_id: int) -> dict:
    """Wait for the response to a request, discarding stale ones."""
    while True:
        response = worker.get_message(timeout=RESPONSE_TIMEOUT)
        if response.get("request_id") == request_id:
            return response

def load_index(worker: SearchWorker, tracks_path: Path) -> bool:
    """Send the track catalog to the worker and report the rebuild."""
    print(f"  ⏳ Indexing {tracks_path.name}...")
    start_time = time.time()
    payload = tracks_path.read_text(encoding="utf-8")
    worker.post_message({"action": UPDATE_SEARCH_INDEX, "data": payload, "request_id": 0})
    response = wait_for(worker, 0)

    if "error" in response:
        print(f"  ❌ Could not index tracks: {response['error']}")
        return False

    documents = response["data"]["documents"]
    print(f"  ✓ Indexed {documents:,} tracks in {format_elapsed_time(time.time() - start_time)}")
    return True

def run_queries(worker: SearchWorker, queries):
    """Run each query through the worker and print the ranked track ids."""
    for request_id, query in enumerate(queries, 1):
        worker.post_message({"action": PERFORM_SEARCH, "data": query, "request_id": request_id})
        response = wait_for(worker, request_id)
        print(format_results(query, response["data"]))

def interactive_queries():
    """Yield queries typed at the prompt until an empty line or Ctrl+C."""
    while True:
        try:
            query = input("\n  🔍 Search (blank to quit): ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\n\nGoodbye!")
            return
        if not query:
            return
        yield query

def main():
    """Index a JSON track catalog and search it."""
    parser = argparse.ArgumentParser(description="Track text search")
    parser.add_argument(
        'tracks',
        type=Path,
        help='JSON file holding a list of track records'
    )
    parser.add_argument(
        '-q', '--query',
        action='append',
        default=[],
        help='Search query to run (repeatable); prompts interactively if omitted'
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=config_manager.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print_header(f"Track Search v{VERSION}")

    if not args.tracks.exists():
        print(f"  ❌ Tracks file not found: {args.tracks}")
        return 1

    with SearchWorker() as worker:
        try:
            if not load_index(worker, args.tracks):
                return 1
            run_queries(worker, args.query or interactive_queries())
        except queue.Empty:
            print("  ❌ Timed out waiting for the search worker")
            return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
