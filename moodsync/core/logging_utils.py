import logging

# Project logger; every module logs through the helpers below.
logger = logging.getLogger("moodsync")


def log_section(title: str) -> None:
    """
    Log a top-level section header.
    """
    logger.info("=== %s ===", title)


def log_info(message: str) -> None:
    logger.info("%s", message)


def log_step(message: str) -> None:
    """
    Action step / ongoing work (e.g. an outbound vendor call).
    """
    logger.info("→ %s", message)


def log_stage(stage: str, message: str = "") -> None:
    """
    Pipeline state transition, e.g. "classifying" or "failed".
    Logged at DEBUG so that a normal run only shows steps and outcomes.
    """
    if message:
        logger.debug("[%s] %s", stage, message)
    else:
        logger.debug("[%s]", stage)


def log_success(message: str) -> None:
    logger.info("✅ %s", message)


def log_warning(message: str) -> None:
    """
    Non-fatal problem; the caller carries on with a degraded result.
    """
    logger.warning("⚠️ %s", message)


def log_error(message: str) -> None:
    logger.error("❌ %s", message)
