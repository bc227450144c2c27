import logging
from logging.handlers import RotatingFileHandler


def configure_logging(level: str = "INFO", log_file: str = "spaceapi.log") -> None:
    logger = logging.getLogger()
    logger.setLevel(level.upper())

    # Called again on reload: drop what we installed last time
    for h in list(logger.handlers):
        if getattr(h, "_spaceapi", False):
            logger.removeHandler(h)
            h.close()

    fmt = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s - %(message)s"
    )

    # Console
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch._spaceapi = True
    logger.addHandler(ch)

    # Rotating file
    if log_file:
        fh = RotatingFileHandler(
            log_file, maxBytes=2_000_000, backupCount=5
        )
        fh.setFormatter(fmt)
        fh._spaceapi = True
        logger.addHandler(fh)

    # aiosqlite logs every executed statement at DEBUG
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
