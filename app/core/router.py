import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol

from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.responses import Response

from ..config import AppConfig
from ..domain.moon import moon_phase
from .inference_proxy import InferenceProxy
from .keywords import extract_query_text, match_keyword_reply

logger = logging.getLogger(__name__)


CHAT_PATH = "/api/chat"
STATIC_PATHS = ("/", "/favicon.ico")


class AssetFetcher(Protocol):
    async def fetch(self, request: Request) -> Response: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RequestRouter:
    """
    Ponto de entrada de todas as requisições.

    Regras avaliadas em ordem, a primeira que casar responde:
    1. Palavra-chave em `message`/`q` -> resposta da fase lunar (qualquer rota)
    2. Rotas estáticas -> assets
    3. /api/chat -> proxy de inferência (só POST)
    4. Resto -> 404
    """

    def __init__(
        self,
        config: AppConfig,
        assets: AssetFetcher,
        proxy: InferenceProxy,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._config = config
        self._assets = assets
        self._proxy = proxy
        self._clock = clock or utc_now

    def is_static_path(self, path: str) -> bool:
        if path in STATIC_PATHS:
            return True
        return self._config.static_catch_all and not path.startswith("/api/")

    async def dispatch(self, request: Request) -> Response:
        request_id = getattr(request.state, "request_id", "unknown")
        path = request.url.path

        query_text = extract_query_text(request.query_params)
        if query_text:
            phase = moon_phase(self._clock())
            reply = match_keyword_reply(query_text, phase)
            if reply is not None:
                logger.info(
                    f"Resposta por palavra-chave: request_id={request_id}, "
                    f"path={path}, phase={phase.value}"
                )
                return PlainTextResponse(reply)

        if self.is_static_path(path):
            return await self._assets.fetch(request)

        if path == CHAT_PATH:
            if request.method == "POST":
                return await self._proxy.handle(request)
            logger.warning(
                f"Método não permitido em {CHAT_PATH}: request_id={request_id}, "
                f"method={request.method}"
            )
            return PlainTextResponse("Method not allowed", status_code=405)

        return PlainTextResponse("Not found", status_code=404)
