import os
import traceback
import config

LEVELS = {"DEBUG": 10, "INFO": 20, "WARN": 30, "ERROR": 40}

_phase = None


def set_phase(phase):
    global _phase
    _phase = phase


def enabled(level):
    threshold = LEVELS.get(str(getattr(config, "LOG_LEVEL", "INFO")).upper(), 20)
    return LEVELS.get(level, 20) >= threshold


def log(scope, msg, level="INFO"):
    if not enabled(level):
        return
    pid = os.getpid()
    phase_tag = f" {_phase}" if _phase is not None else ""
    text = f"[{level}{phase_tag} pid{pid} {scope}] {msg}"
    use_color = getattr(config, "LOG_COLOR", True) and os.getenv("NO_COLOR") is None
    if use_color:
        if level == "WARN":
            text = f"\x1b[33m{text}\x1b[0m"
        elif level == "ERROR":
            text = f"\x1b[31m{text}\x1b[0m"
    print(text)


def guarded(scope, what, fn, *args, **kwargs):
    """Call fn, logging (not raising) any exception. Returns fn's result, or False on failure."""
    try:
        return fn(*args, **kwargs)
    except Exception as ex:
        log(scope, f"{what} failed: {ex!r}", level="ERROR")
        traceback.print_exc()
        return False
