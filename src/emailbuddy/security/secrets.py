"""
SecretStore -- provider API keys from the environment or the macOS keychain.

Lookup order for an account such as "openai_api_key":
  1. Environment variable OPENAI_API_KEY
  2. macOS keychain item (service "emailbuddy", account "openai_api_key")

Keys are never logged. Missing keys resolve to "" so providers can fail with
a readable "missing key" message instead of an exception from here.
"""

import asyncio
import logging
import os
import sys

logger = logging.getLogger(__name__)

KEYCHAIN_SERVICE = "emailbuddy"
KNOWN_ACCOUNTS = ("openai_api_key", "anthropic_api_key")


class SecretStoreError(RuntimeError):
    """Raised when a secret cannot be stored."""

    pass


class SecretStore:
    """
    Read and write provider credentials.

    Usage:
        secrets = SecretStore()
        key = await secrets.get("openai_api_key")
        await secrets.set("anthropic_api_key", "sk-ant-...")
    """

    def __init__(self, service: str = KEYCHAIN_SERVICE, use_keychain: bool | None = None):
        self._service = service
        self._use_keychain = sys.platform == "darwin" if use_keychain is None else use_keychain

    @staticmethod
    def env_var_for(account: str) -> str:
        return account.strip().upper()

    async def get(self, account: str) -> str:
        """Return the secret for `account`, or "" if it is not configured."""
        value = os.environ.get(self.env_var_for(account), "").strip()
        if value:
            return value
        if not self._use_keychain:
            return ""

        code, stdout, _ = await self._run_security(
            "find-generic-password", "-a", account, "-s", self._service, "-w"
        )
        if code != 0:
            logger.debug(f"[SecretStore] No keychain entry for {account}")
            return ""
        return stdout.strip()

    async def set(self, account: str, value: str) -> None:
        """Store `value` in the keychain under `account`."""
        if account not in KNOWN_ACCOUNTS:
            raise SecretStoreError(
                f"Unsupported account: {account} (expected one of {', '.join(KNOWN_ACCOUNTS)})"
            )
        if not self._use_keychain:
            raise SecretStoreError(
                "Keychain storage is only available on macOS; "
                f"set {self.env_var_for(account)} in the environment instead"
            )

        code, _, stderr = await self._run_security(
            "add-generic-password", "-U", "-a", account, "-s", self._service, "-w", value
        )
        if code != 0:
            raise SecretStoreError(f"Keychain write failed: {stderr.strip()[:200]}")
        logger.info(f"[SecretStore] Stored secret for {account}")

    async def status(self) -> dict[str, bool]:
        """Which provider keys are configured (never the values)."""
        return {
            "openaiConfigured": bool(await self.get("openai_api_key")),
            "anthropicConfigured": bool(await self.get("anthropic_api_key")),
        }

    async def _run_security(self, *args: str) -> tuple[int, str, str]:
        try:
            process = await asyncio.create_subprocess_exec(
                "security",
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError:
            return 127, "", "security tool not found"
        stdout, stderr = await process.communicate()
        return process.returncode or 0, stdout.decode(), stderr.decode()
