import logging
from typing import Iterable, List

from .models import Message, Role

logger = logging.getLogger(__name__)


def prepare_conversation(messages: Iterable[Message], system_prompt: str) -> List[Message]:
    """
    Garante que a conversa enviada ao modelo tenha um prompt de sistema.

    - Sem nenhuma mensagem de sistema: insere o prompt na primeira posição.
    - Já existe mensagem de sistema (em qualquer posição): devolve a conversa
      como veio, sem mover nem duplicar.

    Sempre devolve uma lista nova; a entrada não é alterada.

    Args:
        messages: Mensagens recebidas do cliente (pode ser vazia)
        system_prompt: Prompt de sistema configurado

    Returns:
        Lista de mensagens pronta para o modelo
    """
    conversation = list(messages)

    if any(m.role == Role.SYSTEM for m in conversation):
        logger.debug(
            f"Conversa já contém mensagem de sistema: num_messages={len(conversation)}"
        )
        return conversation

    return [Message(role=Role.SYSTEM, content=system_prompt)] + conversation
