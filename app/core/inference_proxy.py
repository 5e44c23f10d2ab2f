import json
import logging
import time
from typing import AsyncIterator, Iterator, List, Optional, Protocol

import anyio
from fastapi import Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel
from starlette.concurrency import iterate_in_threadpool, run_in_threadpool
from starlette.responses import Response

from ..config import AppConfig
from .conversation import prepare_conversation
from .models import Message, Role

logger = logging.getLogger(__name__)


FAILURE_BODY = {"error": "Failed to process request"}

# Frame final enviado quando o backend falha depois que o stream já começou
STREAM_ERROR_FRAME = (
    "event: error\n"
    f"data: {json.dumps({'error': 'Stream interrupted'})}\n\n"
).encode("utf-8")


class ChatMessageIn(BaseModel):
    role: Role
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessageIn] = []


class RawStream(Protocol):
    content_type: Optional[str]

    def iter_bytes(self) -> Iterator[bytes]: ...

    def close(self) -> None: ...


class InferenceBackend(Protocol):
    def open_stream(
        self,
        model: str,
        messages: List[Message],
        max_tokens: int,
        request_id: Optional[str] = None,
    ) -> RawStream: ...


class InferenceProxy:
    """
    Encaminha a conversa para o backend de inferência e repassa o stream
    de resposta ao cliente sem bufferizar.

    Erros antes do início do stream viram 500 com corpo JSON genérico;
    a causa fica apenas nos logs.
    """

    def __init__(self, backend: InferenceBackend, config: AppConfig) -> None:
        self._backend = backend
        self._config = config

    async def handle(self, request: Request) -> Response:
        request_id = getattr(request.state, "request_id", "unknown")
        start_time = time.time()
        try:
            body = await request.json()
            payload = ChatRequest.model_validate(body)
            messages = [Message(role=m.role, content=m.content) for m in payload.messages]
            conversation = prepare_conversation(messages, self._config.system_prompt)

            logger.info(
                f"Recebida requisição /api/chat: request_id={request_id}, "
                f"num_messages={len(messages)}, model={self._config.model_id}"
            )

            stream = await run_in_threadpool(
                self._backend.open_stream,
                self._config.model_id,
                conversation,
                self._config.max_tokens,
                request_id,
            )
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"Erro ao processar requisição de chat: request_id={request_id}, "
                f"duration_ms={duration_ms:.2f}, error={type(e).__name__}: {e}",
                exc_info=True,
            )
            return JSONResponse(FAILURE_BODY, status_code=500)

        return StreamingResponse(
            self._relay(stream, request_id),
            media_type=stream.content_type or "text/event-stream",
        )

    async def _relay(self, stream: RawStream, request_id: str) -> AsyncIterator[bytes]:
        """
        Repassa os chunks do backend na ordem em que chegam.
        Fecha o stream do backend ao final, inclusive se o cliente desconectar
        (o cancelamento da task não interrompe o close).
        """
        total_bytes = 0
        try:
            async for chunk in iterate_in_threadpool(stream.iter_bytes()):
                total_bytes += len(chunk)
                yield chunk
        except Exception as e:
            logger.error(
                f"Stream do backend interrompido: request_id={request_id}, "
                f"bytes_relayed={total_bytes}, error={type(e).__name__}: {e}",
                exc_info=True,
            )
            yield STREAM_ERROR_FRAME
        else:
            logger.debug(
                f"Stream concluído: request_id={request_id}, bytes_relayed={total_bytes}"
            )
        finally:
            with anyio.CancelScope(shield=True):
                await run_in_threadpool(stream.close)
