import os
import tempfile
import threading
from pathlib import Path

import httpx

from analyzer.auditor.exceptions import EngineScriptUnavailableError
from analyzer.logging.logger import Log

_download_lock = threading.Lock()


def ensure_engine_script(path: Path, source_url: str, timeout_seconds: int = 30) -> Path:
    """Return the path of the rule engine script, downloading it once if missing.

    The download lands in a temporary file beside ``path`` and is renamed into
    place, so ``path`` only ever holds a complete script.

    Args:
        path: Where the script lives (or will be written).
        source_url: URL to fetch the script from when ``path`` does not exist.
        timeout_seconds: HTTP timeout for the download.

    Raises:
        EngineScriptUnavailableError: if the file is missing and the download fails.
    """
    if path.is_file():
        return path

    with _download_lock:
        if path.is_file():
            return path
        Log.info(f"Engine script not found at {path}, downloading from {source_url}")
        try:
            response = httpx.get(source_url, timeout=timeout_seconds, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise EngineScriptUnavailableError(
                f"Failed to download engine script from {source_url}: {exc}"
            ) from exc

        _write_atomically(path, response.content)

    Log.info(f"Engine script saved to {path} ({len(response.content)} bytes)")
    return path


def _write_atomically(path: Path, content: bytes) -> None:
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=f".{path.name}.", suffix=".part", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise EngineScriptUnavailableError(
            f"Failed to write engine script to {path}: {exc}"
        ) from exc
