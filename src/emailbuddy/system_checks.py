"""
Local model readiness checks for the options page and `emailbuddy doctor`.

Answers: is the ollama binary installed, is `ollama serve` reachable, and
has the default model been pulled?
"""

import asyncio
import logging

import httpx

from .providers.ollama_provider import DEFAULT_BASE_URL, DEFAULT_LOCAL_MODEL

logger = logging.getLogger(__name__)

SERVE_PROBE_TIMEOUT_SECONDS = 1.2


def parse_ollama_model_list(output: str | None) -> list[str]:
    """Model names from `ollama list` output (header row optional)."""
    lines = [line.strip() for line in (output or "").splitlines() if line.strip()]
    if not lines:
        return []
    if lines[0].upper().startswith("NAME"):
        lines = lines[1:]
    return [line.split()[0] for line in lines]


async def _run(*args: str) -> tuple[int, str]:
    """Run a command, returning (exit code, stdout+stderr). 127 if missing."""
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except (FileNotFoundError, PermissionError):
        return 127, ""
    stdout, stderr = await process.communicate()
    return process.returncode or 0, stdout.decode() + stderr.decode()


async def check_ollama_version() -> str | None:
    """Version string, "" if installed but silent, None if not installed."""
    code, output = await _run("ollama", "--version")
    if code != 0:
        return None
    return output.strip()


async def check_ollama_serve_reachable(base_url: str = DEFAULT_BASE_URL) -> bool:
    try:
        async with httpx.AsyncClient(timeout=SERVE_PROBE_TIMEOUT_SECONDS) as client:
            response = await client.get(f"{base_url}/api/tags")
            return response.status_code == 200
    except httpx.HTTPError as e:
        logger.debug(f"[SystemChecks] Ollama serve unreachable: {e}")
        return False


async def check_model_pulled(model: str) -> bool:
    code, output = await _run("ollama", "list")
    if code != 0:
        return False
    return model in parse_ollama_model_list(output)


async def get_system_checks(model: str = DEFAULT_LOCAL_MODEL) -> dict:
    version = await check_ollama_version()
    if version is None:
        return {
            "defaultLocalModel": model,
            "ollamaInstalled": False,
            "ollamaVersion": None,
            "ollamaServeReachable": False,
            "ollamaModelPulled": False,
        }

    reachable, pulled = await asyncio.gather(
        check_ollama_serve_reachable(),
        check_model_pulled(model),
    )
    return {
        "defaultLocalModel": model,
        "ollamaInstalled": True,
        "ollamaVersion": version or None,
        "ollamaServeReachable": reachable,
        "ollamaModelPulled": pulled,
    }
