import logging
import time
from contextlib import ExitStack
from typing import Iterator, List, Optional
from openai import OpenAI
from ..core.models import Message
from ..config import AppConfig

logger = logging.getLogger(__name__)


class InferenceStream:
    """
    Resposta bruta e ainda aberta do backend de inferência.

    Os bytes são repassados exatamente como o backend os enviou
    (tipicamente frames Server-Sent Events).
    """

    def __init__(self, response, exit_stack: ExitStack) -> None:
        self._response = response
        self._exit_stack = exit_stack

    @property
    def content_type(self) -> Optional[str]:
        return self._response.headers.get("content-type")

    def iter_bytes(self) -> Iterator[bytes]:
        return self._response.iter_bytes()

    def close(self) -> None:
        self._exit_stack.close()


class InferenceClient:
    """
    Encapsula chamadas ao backend de inferência (API compatível com OpenAI,
    ex.: Workers AI em /ai/v1).
    Não faz retry: qualquer falha é terminal para a requisição.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._client = OpenAI(
            api_key=config.inference_api_key,
            base_url=config.inference_base_url,
            max_retries=0,
        )

    def build_payload(self, messages: List[Message]) -> List[dict]:
        """
        Constrói a lista de mensagens no formato esperado pela API.
        """
        return [m.to_payload() for m in messages]

    def open_stream(
        self,
        model: str,
        messages: List[Message],
        max_tokens: int,
        request_id: Optional[str] = None,
    ) -> InferenceStream:
        """
        Abre a chamada em modo streaming e devolve o corpo bruto ainda não lido.

        Args:
            model: ID do modelo
            messages: Conversa já preparada (com prompt de sistema)
            max_tokens: Limite de tokens de saída
            request_id: ID da requisição para logs (opcional)

        Returns:
            InferenceStream aberto; quem consome deve chamar close()

        Raises:
            APIError: Se o backend recusar a chamada ou estiver inacessível
        """
        request_id_str = f"request_id={request_id}, " if request_id else ""
        logger.debug(
            f"Chamando backend de inferência: {request_id_str}model={model}, "
            f"num_messages={len(messages)}, max_tokens={max_tokens}"
        )

        start_time = time.time()
        exit_stack = ExitStack()
        try:
            response = exit_stack.enter_context(
                self._client.chat.completions.with_streaming_response.create(
                    model=model,
                    messages=self.build_payload(messages),
                    max_tokens=max_tokens,
                    stream=True,
                )
            )
        except Exception:
            exit_stack.close()
            raise

        duration_ms = (time.time() - start_time) * 1000
        logger.info(
            f"Stream aberto no backend de inferência: {request_id_str}model={model}, "
            f"status={response.status_code}, duration_ms={duration_ms:.2f}"
        )
        return InferenceStream(response, exit_stack)
