"""Debug tracing for the AudioViz GUI.

Usage::

    from audiovizgui.log import dbg

    dbg("amplitude build #3 started")

Nothing is printed unless tracing is on: ``AV_DEBUG=1`` (or ``true``) in
the environment, or ``audioviz-gui --debug`` which calls
:func:`set_debug`.  Lines go to stderr as::

    [12:00:01.250 AmplitudeChartWidget] amplitude build #3 started
    [12:00:01.391 compute@Dummy-1] amplitude cache: 718 points, 140.2 ms

Cache builds and file decoding run on worker threads, so lines emitted
off the GUI thread carry the thread name after ``@``.
"""

from __future__ import annotations

import inspect
import os
import sys
import threading
import time

_ENABLED: bool | None = None


def set_debug(enabled: bool | None) -> None:
    """Force tracing on or off; ``None`` goes back to reading ``AV_DEBUG``."""
    global _ENABLED
    _ENABLED = enabled


def debug_enabled() -> bool:
    global _ENABLED
    if _ENABLED is None:
        val = os.environ.get("AV_DEBUG", "").strip().lower()
        _ENABLED = val in ("1", "true")
    return _ENABLED


def _origin(frame) -> str:
    """Class name of the logging object, else the short module name."""
    self_obj = frame.f_locals.get("self")
    if self_obj is not None:
        return type(self_obj).__name__
    mod = frame.f_globals.get("__name__", "")
    return mod.rsplit(".", 1)[-1] if mod else "?"


def _tag() -> str:
    frame = inspect.currentframe()
    try:
        # _tag -> dbg -> call site
        caller = frame.f_back.f_back if frame and frame.f_back else None
        name = _origin(caller) if caller is not None else "?"
    finally:
        del frame
    thread = threading.current_thread()
    if thread is not threading.main_thread():
        name = f"{name}@{thread.name}"
    return name


def dbg(msg: str) -> None:
    if not debug_enabled():
        return
    t = time.strftime("%H:%M:%S")
    ms = int((time.time() % 1) * 1000)
    print(f"[{t}.{ms:03d} {_tag()}] {msg}", file=sys.stderr, flush=True)
