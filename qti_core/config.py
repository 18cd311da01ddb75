from __future__ import annotations
import logging, os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


# QTI 3 test/item documents use kebab-case tags; results reports keep the
# QTI 2 camelCase vocabulary.
ASSESSMENT_TEST_TAG: str = "qti-assessment-test"
ASSESSMENT_ITEM_REF_TAG: str = "qti-assessment-item-ref"
ASSESSMENT_ITEM_TAG: str = "qti-assessment-item"

CONTEXT_TAG: str = "context"
SESSION_IDENTIFIER_TAG: str = "sessionIdentifier"
ITEM_RESULT_TAG: str = "itemResult"
RESPONSE_VARIABLE_TAG: str = "responseVariable"
CANDIDATE_RESPONSE_TAG: str = "candidateResponse"
OUTCOME_VARIABLE_TAG: str = "outcomeVariable"
VALUE_TAG: str = "value"

LOG_LEVEL: str = "INFO"
MAX_XML_BYTES: int = 5 * 1024 * 1024
AUDIT_FAIL_ON_WARNINGS: bool = True

# // env overrides for deployments; defaults remain conservative.
LOG_LEVEL = _env_str("QTI_LOG_LEVEL", LOG_LEVEL).upper()
MAX_XML_BYTES = _env_int("QTI_MAX_XML_BYTES", MAX_XML_BYTES)
AUDIT_FAIL_ON_WARNINGS = _env_bool("QTI_AUDIT_FAIL_ON_WARNINGS", AUDIT_FAIL_ON_WARNINGS)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="[%(levelname)s] %(message)s",
    )
