import logging
import sys
from pathlib import Path

from loguru import logger

from src.bookclub.runtime.context import get_config


def configure_logging():
    main_config = get_config()
    cfg = main_config.logging
    env = main_config.app.environment

    # 0) Reset Loguru; every record carries a request_id, "-" outside requests
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    # Records bound before configure() ran may still lack it
    def _ensure_request_id(record):
        record["extra"].setdefault("request_id", "-")

    log = logger.patch(_ensure_request_id)

    # 1) Formats
    fmt_plain = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "[<cyan>{extra[request_id]}</cyan>] | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    # serialize=True renders the whole record; the format only fills "text"
    fmt_json_message = "{message}"
    is_json_file = cfg.format == "json"

    # Extended tracebacks with variable values outside production only
    backtrace_on = env != "production"
    diagnose_on = env != "production"

    # 2) Sinks
    # Console: colorized and human-readable whatever the file format
    log.add(
        sys.stderr,
        level=cfg.level,
        format=fmt_plain,
        colorize=True,
        serialize=False,
        backtrace=backtrace_on,
        diagnose=diagnose_on,
        enqueue=False,
    )

    # File: optional, rotated by size, JSON lines when format is json
    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        log.add(
            str(path),
            level=cfg.level,
            format=fmt_json_message if is_json_file else fmt_plain,
            serialize=is_json_file,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=backtrace_on,
            diagnose=diagnose_on,
        )

    # 3) Route stdlib logging (uvicorn, SQLAlchemy) into Loguru
    class InterceptHandler(logging.Handler):
        """Forward standard 'logging' records to Loguru."""

        def emit(self, record: logging.LogRecord) -> None:
            # Request lines come from the log_requests middleware
            if record.name == "uvicorn.access":
                return

            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno  # custom stdlib level, keep the number

            # depth=2 skips this handler and logging's own frames
            logger.opt(
                depth=2,
                exception=record.exc_info,
            ).bind(
                logger_name=record.name
            ).log(level, record.getMessage())

    # 4) Install the interceptor as the only root handler
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Loggers created before this point must propagate instead of printing directly
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    # 5) Noise levels
    # SQL echo only at WARNING; statements are never logged at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    # Uvicorn: lifecycle messages stay visible, access lines are dropped above
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)

    # 6) Structured fields go in as kwargs so they land in extra
    log.info(
        "Logging configured",
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=env,
    )
