from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class Message:
    """
    Uma mensagem da conversa. A ordem das mensagens na lista é a ordem
    dos turnos.
    """
    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        """
        Formato esperado pela API de chat completions.
        """
        return {"role": self.role.value, "content": self.content}
