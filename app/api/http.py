import logging
import time
from datetime import datetime
from uuid import uuid4
from typing import Callable, Optional
from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from ..config import AppConfig
from ..core.inference_proxy import InferenceBackend, InferenceProxy
from ..core.router import AssetFetcher, RequestRouter
from ..infra.assets import StaticAssetFetcher
from ..infra.openai_client import InferenceClient

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware que gera request_id único para cada requisição
    e adiciona aos logs e headers de resposta.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = uuid4().hex[:16]
        request.state.request_id = request_id

        start_time = time.time()

        response = await call_next(request)

        response.headers["X-Request-ID"] = request_id

        # Para respostas em streaming mede só até o início do corpo
        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            f"Request processado: request_id={request_id}, "
            f"method={request.method}, path={request.url.path}, "
            f"status={response.status_code}, duration_ms={duration_ms:.2f}"
        )

        return response


def create_app(
    config: Optional[AppConfig] = None,
    backend: Optional[InferenceBackend] = None,
    assets: Optional[AssetFetcher] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """
    Cria a aplicação FastAPI e injeta dependências principais
    (config, backend de inferência, assets estáticos).

    Tudo que não for passado é construído a partir do ambiente.
    """
    config = config or AppConfig.load_from_env()
    backend = backend or InferenceClient(config)
    assets = assets or StaticAssetFetcher(config.assets_dir)

    proxy = InferenceProxy(backend=backend, config=config)
    router = RequestRouter(config=config, assets=assets, proxy=proxy, clock=clock)

    # Sem /docs nem /openapi.json: toda rota passa pelo RequestRouter
    app = FastAPI(
        title="Lunar Chat Edge",
        version="0.1.0",
        description="Fase lunar, assets estáticos e proxy de chat para o modelo de linguagem.",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    app.add_middleware(RequestIDMiddleware)

    logger.info(
        f"Aplicação configurada: model={config.model_id}, max_tokens={config.max_tokens}, "
        f"assets_dir={config.assets_dir}, static_catch_all={config.static_catch_all}, env={config.env}"
    )

    # Rota sem lista de métodos: qualquer verbo (inclusive TRACE ou customizados)
    # chega ao RequestRouter
    async def handle_any(request: Request) -> Response:
        return await router.dispatch(request)

    app.add_route("/{full_path:path}", handle_any, include_in_schema=False)

    return app
