import logging
import uvicorn
import os
from logging.handlers import RotatingFileHandler
from datetime import datetime

from app.api.http import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(log_dir: str = "logs", level: str = "INFO") -> str:
    """
    Configuração central de logging: console + arquivo com rotação
    (máximo 10MB por arquivo, mantém 5 backups).

    Returns:
        Caminho do arquivo de log
    """
    os.makedirs(log_dir, exist_ok=True)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    log_file = os.path.join(log_dir, "app.log")
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)
    return log_file


log_file = configure_logging(
    log_dir=os.getenv("LOG_DIR", "logs"),
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
)
logging.info(f"Logging configurado. Arquivo de log: {log_file}")
logging.info(f"Aplicação iniciada em {datetime.now().strftime(DATE_FORMAT)}")

app = create_app()

if __name__ == "__main__":
    # Em produção, quem sobe isso é o process manager (systemd, docker, etc.)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        log_level="info",
    )
