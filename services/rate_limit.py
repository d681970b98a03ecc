# services/rate_limit.py
import time

from errors import RateLimitError

# Sweep expired keys once this many are tracked
MAX_TRACKED_KEYS = 10000

# key -> (window_seconds, timestamps of recent attempts), per process
_attempts = {}


def _sweep(current_time):
    expired = [
        key for key, (window, stamps) in _attempts.items()
        if not stamps or current_time - stamps[-1] >= window
    ]
    for key in expired:
        del _attempts[key]


def hit(key, max_requests, window_seconds, message="Too many attempts. Try again later."):
    """Record an attempt for ``key``; raise RateLimitError once the window is full."""
    current_time = time.time()
    if len(_attempts) >= MAX_TRACKED_KEYS:
        _sweep(current_time)

    _, stamps = _attempts.get(key, (window_seconds, []))
    recent = [t for t in stamps if current_time - t < window_seconds]

    if len(recent) >= max_requests:
        _attempts[key] = (window_seconds, recent)
        raise RateLimitError(message)

    recent.append(current_time)
    _attempts[key] = (window_seconds, recent)


def reset():
    _attempts.clear()
