import logging
from fastapi import Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles

logger = logging.getLogger(__name__)


class StaticAssetFetcher:
    """
    Serve arquivos estáticos de um diretório (modo HTML: "/" -> index.html).

    Devolve a resposta do arquivo ou um texto simples com o status do erro
    (404 quando o asset não existe).
    """

    def __init__(self, directory: str) -> None:
        self._directory = directory
        self._static = StaticFiles(directory=directory, html=True, check_dir=False)

    async def fetch(self, request: Request) -> Response:
        path = self._static.get_path(request.scope)
        try:
            return await self._static.get_response(path, request.scope)
        except StarletteHTTPException as e:
            logger.debug(
                f"Asset não servido: path={request.url.path}, status={e.status_code}"
            )
            if e.status_code == 404:
                return PlainTextResponse("Not found", status_code=404)
            if e.status_code == 405:
                return PlainTextResponse("Method not allowed", status_code=405)
            return PlainTextResponse(str(e.detail), status_code=e.status_code)
