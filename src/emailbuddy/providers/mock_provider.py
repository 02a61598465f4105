"""MockProvider -- deterministic, offline rewrite for local testing of the extension."""

from .base import ProviderRequest, require_output


class MockProvider:
    """Echoes the draft tagged with its mode: "[casual] hello team"."""

    @property
    def name(self) -> str:
        return "mock"

    async def rewrite(self, request: ProviderRequest) -> str:
        return require_output(f"[{request.mode}] {request.text.strip()}", "Mock", "text")
