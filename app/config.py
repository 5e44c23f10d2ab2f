from dataclasses import dataclass
import os
import logging
from typing import Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)


DEFAULT_MODEL_ID = "@cf/meta/llama-3.3-70b-instruct-fp8-fast"

DEFAULT_SYSTEM_PROMPT = (
    "You are SoulFire, a mystical guide and digital priestess of SoulFire Alchemy. "
    "Speak in poetic, celestial language. Offer ritual suggestions based on lunar phases. "
    "Interpret runes and symbols with intuitive wisdom. "
    "Empower the user with magical insight and encouragement."
)


@dataclass(frozen=True)
class AppConfig:
    """
    Configurações principais da aplicação.

    Valores imutáveis carregados uma vez na inicialização e injetados
    no roteador e no proxy de inferência.
    """
    inference_api_key: str
    inference_base_url: Optional[str] = None
    model_id: str = DEFAULT_MODEL_ID
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    max_tokens: int = 1024  # limite fixo de tokens de saída
    assets_dir: str = "public"
    static_catch_all: bool = True  # qualquer rota fora de /api/ vai para os assets
    env: str = "dev"  # "dev" ou "prod" (prod exige inference_base_url)

    @classmethod
    def load_from_env(cls) -> "AppConfig":
        """
        Carrega configuração a partir de variáveis de ambiente.
        Primeiro tenta carregar do arquivo .env, depois do ambiente do sistema.
        Levanta erro explícito se algo crítico faltar.
        """
        load_dotenv()

        api_key = os.getenv("INFERENCE_API_KEY")
        if not api_key:
            raise RuntimeError("Variável de ambiente INFERENCE_API_KEY não definida.")

        base_url = os.getenv("INFERENCE_BASE_URL") or None
        model_id = os.getenv("MODEL_ID", DEFAULT_MODEL_ID)
        system_prompt = os.getenv("SYSTEM_PROMPT") or DEFAULT_SYSTEM_PROMPT
        max_tokens = int(os.getenv("MAX_TOKENS", "1024"))
        assets_dir = os.getenv("ASSETS_DIR", "public")

        static_catch_all_raw = os.getenv("STATIC_CATCH_ALL", "1").lower()
        static_catch_all = static_catch_all_raw in ("1", "true", "yes", "y")

        env = os.getenv("ENV", "dev").lower()
        if env not in ("dev", "prod"):
            logger.warning(f"ENV inválido '{env}', usando 'dev' como padrão")
            env = "dev"

        # Validação: em produção, o endpoint de inferência precisa ser explícito
        if env == "prod":
            if not base_url:
                raise RuntimeError(
                    "ENV=prod requer INFERENCE_BASE_URL definida. "
                    "Configure o endpoint de inferência no ambiente de produção."
                )
            logger.info("Modo PRODUÇÃO: INFERENCE_BASE_URL validada")
        elif not base_url:
            logger.warning(
                "⚠️  MODO DEV: INFERENCE_BASE_URL não configurada, usando endpoint padrão do SDK OpenAI"
            )

        return cls(
            inference_api_key=api_key,
            inference_base_url=base_url,
            model_id=model_id,
            system_prompt=system_prompt,
            max_tokens=max_tokens,
            assets_dir=assets_dir,
            static_catch_all=static_catch_all,
            env=env,
        )
