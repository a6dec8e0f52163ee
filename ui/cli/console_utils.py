# ui/cli/console_utils.py
from typing import Hashable, List
from config import FRAME_WIDTH

def print_header(title):
    """Print a clean header with title."""
    print("\n" + "═" * FRAME_WIDTH)
    print(f"  {title}")
    print("═" * FRAME_WIDTH)

def format_elapsed_time(seconds: float) -> str:
    """Format elapsed time in a human-readable way."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        minutes = int(seconds // 60)
        seconds = seconds % 60
        return f"{minutes}m {seconds:.0f}s"
    else:
        hours = int(seconds // 3600)
        minutes = int((seconds % 3600) // 60)
        return f"{hours}h {minutes}m"

def format_results(query: str, track_ids: List[Hashable], limit: int = 25) -> str:
    """Format ranked track ids for display."""
    if not track_ids:
        return f"  No tracks found for '{query}'"

    lines = [f"  {len(track_ids):,} track(s) for '{query}':"]
    for rank, track_id in enumerate(track_ids[:limit], 1):
        lines.append(f"    {rank:>3}. {track_id}")
    if len(track_ids) > limit:
        lines.append(f"    ... and {len(track_ids) - limit:,} more")
    return "\n".join(lines)
