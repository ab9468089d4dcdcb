import asyncio
import warnings


def _warn_if_loop_exists():
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    warnings.warn(
        "Blocking call detected inside an event loop. Await flowscope.analyze() instead of calling analyze_sync().",
        RuntimeWarning,
        stacklevel=3,
    )
