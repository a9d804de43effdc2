import asyncio
import json
from typing import Any, Optional, Sequence

from mtran_client.config_management import (
    AdapterOptions,
    ServerConfig,
    ServerConfigLike,
    validate_config,
)
from mtran_client.errors import (
    InvalidInputError,
    MalformedResponseError,
    MTranError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
    ServiceUnavailableError,
)
from mtran_client.logger import Logger
from mtran_client.transport import HttpRequest, HttpResponse, RequestsTransport, Transport
from mtran_client.translators.base import Translator
from mtran_client.urls import (
    ENDPOINT_HEALTH,
    ENDPOINT_MODELS,
    ENDPOINT_TRANSLATE,
    ENDPOINT_TRANSLATE_BATCH,
    ENDPOINT_VERSION,
    normalize_url,
)

AUTO_LANG = "auto"

# Host detection codes that the server spells differently.
DETECTED_LANG_ALIASES = {"zh_cn": "zh"}


def resolve_source_lang(source_lang: str, detect: Optional[str]) -> str:
    if source_lang != AUTO_LANG or not detect:
        return source_lang
    return DETECTED_LANG_ALIASES.get(detect, detect)


def _json_or_none(response: HttpResponse) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_payload(response: HttpResponse) -> dict:
    payload = _json_or_none(response)
    if payload is None:
        return {}
    if isinstance(payload, dict):
        return payload
    return {"body": payload}


class MTranTranslator(Translator):
    """
    Client for a self-hosted MTranServer instance.

    Connection settings come from the ``translation.mtran`` config section, or
    per call through ``server`` (a ServerConfig or a ``{"apiUrl", "token"}``
    mapping as handed over by the host). Every call is independent: one
    optional health check, then one request raced against its deadline.
    """

    def __init__(
        self,
        config: dict,
        logger: Logger,
        transport: Optional[Transport] = None,
    ):
        super().__init__(config)
        self.logger = logger.get_child("MTranTranslator")
        self.settings: dict = self.config.get("mtran", {}) or {}
        self.options = AdapterOptions.from_mapping(self.settings)
        self.transport = transport or RequestsTransport()

    # --- configuration ---

    def _resolve_server(self, server: ServerConfigLike) -> ServerConfig:
        if server is None and self.settings.get("api_url", self.settings.get("apiUrl")):
            server = self.settings
        return validate_config(server)

    def _base_url(self, server: ServerConfig) -> str:
        return normalize_url(server.api_url, default=self.options.default_url)

    def _headers(self, server: ServerConfig, with_body: bool) -> dict[str, str]:
        headers = {}
        if with_body:
            headers["Content-Type"] = "application/json"
        if server.token:
            # Sent verbatim: the server expects the bare token, no scheme.
            headers["Authorization"] = server.token
        return headers

    # --- request executor ---

    async def _execute(
        self,
        server: ServerConfig,
        endpoint: str,
        label: str,
        method: str = "GET",
        body: Optional[dict] = None,
        timeout_ms: Optional[int] = None,
    ) -> HttpResponse:
        if timeout_ms is None:
            timeout_ms = self.options.translate_timeout_ms
        timeout = timeout_ms / 1000
        request = HttpRequest(
            method=method,
            url=f"{self._base_url(server)}{endpoint}",
            headers=self._headers(server, with_body=body is not None),
            body=json.dumps(body, ensure_ascii=False) if body is not None else None,
            timeout=timeout,
        )
        self.logger.debug(f"{method} {request.url} (timeout {timeout:.1f}s)")

        try:
            return await asyncio.wait_for(self.transport.send(request), timeout)
        except (asyncio.TimeoutError, TimeoutError) as e:
            raise RequestTimeoutError(f"{label} request timed out") from e
        except MTranError:
            raise
        except Exception as e:
            raise NetworkError(
                f"{label}: network or request error", data={"message": str(e)}
            ) from e

    async def _preflight(self, server: ServerConfig):
        if not self.options.preflight_health_check:
            return
        if not await self.check_api(server):
            raise ServiceUnavailableError(
                "Translation service is unavailable",
                data={"message": f"Health check failed for {self._base_url(server)}"},
            )

    # --- response mapper ---

    def _map_field(self, response: HttpResponse, field: str, label: str) -> Any:
        if not response.ok:
            raise ServerError(
                f"{label}: server returned an error",
                response.status,
                _error_payload(response),
            )
        payload = _json_or_none(response)
        if not isinstance(payload, dict) or field not in payload:
            data = payload if isinstance(payload, dict) else {"body": response.text}
            raise MalformedResponseError(
                f"{label}: unexpected response format", response.status, data
            )
        return payload[field]

    # --- public API ---

    async def check_api(self, server: ServerConfigLike = None) -> bool:
        """Checks /health. Never raises: any failure is reported as False."""
        try:
            resolved = self._resolve_server(server)
            response = await self._execute(
                resolved,
                ENDPOINT_HEALTH,
                "Health check",
                timeout_ms=self.options.health_timeout_ms,
            )
            if not response.ok:
                self.logger.warning(f"Health check returned HTTP {response.status}.")
                return False
            data = response.json()
            healthy = isinstance(data, dict) and data.get("status") == "ok"
            self.logger.info(f"MTranServer health: {'ok' if healthy else 'not ok'}.")
            return healthy
        except Exception as e:
            self.logger.error(f"Health check failed: {e}")
            return False

    def _check_text(self, text: Any) -> bool:
        """Returns True when the text should actually be sent to the server."""
        if not isinstance(text, str):
            raise InvalidInputError(
                "Input text must be a string",
                data={"type": type(text).__name__, "value": repr(text)},
            )
        if text.strip():
            return True
        if self.options.empty_text_policy == "reject":
            raise InvalidInputError("Input text must not be empty")
        return False

    async def translate(
        self,
        text: str,
        target_lang: str,
        source_lang: str = AUTO_LANG,
        *,
        detect: Optional[str] = None,
        server: ServerConfigLike = None,
    ) -> str:
        resolved = self._resolve_server(server)
        if not self._check_text(text):
            return ""

        await self._preflight(resolved)
        body = {
            "from": resolve_source_lang(source_lang, detect),
            "to": target_lang,
            "text": text,
        }
        self.logger.debug(
            f"Translating '{text[:30]}...' {body['from']} -> {target_lang}."
        )
        response = await self._execute(
            resolved, ENDPOINT_TRANSLATE, "Translate", method="POST", body=body
        )
        return self._map_field(response, "result", "Translate")

    async def translate_batch(
        self,
        texts: Sequence[str],
        target_lang: str,
        source_lang: str = AUTO_LANG,
        *,
        detect: Optional[str] = None,
        server: ServerConfigLike = None,
    ) -> list[str]:
        resolved = self._resolve_server(server)
        if isinstance(texts, str):
            raise InvalidInputError(
                "Batch input must be a sequence of strings",
                data={"type": "str", "value": repr(texts)},
            )
        texts = list(texts)
        for text in texts:
            if not isinstance(text, str):
                raise InvalidInputError(
                    "Batch input must contain only strings",
                    data={"type": type(text).__name__, "value": repr(text)},
                )
        if not texts:
            if self.options.empty_text_policy == "reject":
                raise InvalidInputError("Batch input must not be empty")
            return []

        await self._preflight(resolved)
        body = {
            "from": resolve_source_lang(source_lang, detect),
            "to": target_lang,
            "texts": texts,
        }
        self.logger.debug(
            f"Batch translating {len(texts)} texts {body['from']} -> {target_lang}."
        )
        response = await self._execute(
            resolved,
            ENDPOINT_TRANSLATE_BATCH,
            "Batch translate",
            method="POST",
            body=body,
        )
        results = self._map_field(response, "results", "Batch translate")
        if not isinstance(results, list):
            raise MalformedResponseError(
                "Batch translate: 'results' is not a list",
                response.status,
                {"results": results},
            )
        return results

    async def get_models(self, server: ServerConfigLike = None) -> list:
        resolved = self._resolve_server(server)
        response = await self._execute(resolved, ENDPOINT_MODELS, "Models")
        return self._map_field(response, "models", "Models")

    async def get_version(self, server: ServerConfigLike = None) -> str:
        resolved = self._resolve_server(server)
        response = await self._execute(resolved, ENDPOINT_VERSION, "Version")
        return self._map_field(response, "version", "Version")
