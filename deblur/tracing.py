"""
Timing spans for the toolkit operations.

Every public operation is wrapped with ``trace_function``. Recording is off
until the global tracer is enabled:

    from deblur.tracing import tracer

    tracer.enable()
    edge_taper(src, mask, image)
    tracer.print_summary()
"""

import time
from contextlib import contextmanager
from functools import wraps


class Tracer:
    """Accumulates call counts and wall time per named span."""

    def __init__(self):
        self._enabled = False
        self._open = []
        self._spans = {}

    def enable(self):
        """Start recording, discarding anything recorded before."""
        self.reset()
        self._enabled = True

    def disable(self):
        self._enabled = False

    def is_enabled(self):
        return self._enabled

    def reset(self):
        self._open.clear()
        self._spans.clear()

    def _path(self, name):
        # Nested spans are keyed by their full path, e.g. "edge_taper/fill_mask"
        return "/".join([entry[0] for entry in self._open] + [name])

    def enter(self, name):
        if self._enabled:
            self._open.append((name, time.perf_counter()))

    def exit(self, name):
        if not self._enabled or not self._open:
            return
        span_name, started = self._open.pop()
        self.record(span_name, time.perf_counter() - started)

    def record(self, name, elapsed):
        """Add one call of ``elapsed`` seconds to span ``name``."""
        if not self._enabled:
            return
        stats = self._spans.setdefault(self._path(name),
                                       {"count": 0, "total_time": 0.0, "max_time": 0.0})
        stats["count"] += 1
        stats["total_time"] += elapsed
        stats["max_time"] = max(stats["max_time"], elapsed)

    def get_summary(self):
        """
        Return recorded spans in first-seen order.

        Returns
        -------
        rows : list of dict
            Keys: name, count, total_time, avg_time, max_time
        """
        return [
            {
                "name": name,
                "count": stats["count"],
                "total_time": stats["total_time"],
                "avg_time": stats["total_time"] / stats["count"],
                "max_time": stats["max_time"],
            }
            for name, stats in self._spans.items()
        ]

    def print_summary(self):
        rows = self.get_summary()
        if not rows:
            print("No tracing data collected.")
            return

        print("\n" + "=" * 72)
        print(f"{'Operation':<40} {'Calls':>7} {'Total (s)':>11} {'Avg (ms)':>11}")
        print("-" * 72)
        for row in rows:
            depth = row["name"].count("/")
            label = "  " * depth + row["name"].rsplit("/", 1)[-1]
            print(f"{label[:40]:<40} {row['count']:>7} {row['total_time']:>11.4f} "
                  f"{row['avg_time'] * 1000:>11.3f}")
        print("=" * 72 + "\n")


tracer = Tracer()


@contextmanager
def trace(name):
    """Record the enclosed block as span ``name``."""
    tracer.enter(name)
    try:
        yield
    finally:
        tracer.exit(name)


def trace_function(name=None):
    """Decorator recording each call of the wrapped function as a span."""
    def decorator(func):
        span_name = name or func.__name__

        @wraps(func)
        def wrapper(*args, **kwargs):
            with trace(span_name):
                return func(*args, **kwargs)

        return wrapper
    return decorator
