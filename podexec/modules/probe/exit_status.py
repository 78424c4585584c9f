"""
Exit status classification for exec streams.

The API server reports process termination as a Status document on the
error channel of the exec stream:

    {"status": "Success"}
    {"status": "Failure", "reason": "NonZeroExitCode",
     "details": {"causes": [{"reason": "ExitCode", "message": "7"}]}}

Anything else means no exit status can be reported.
"""

from typing import Any, Optional

import yaml

from podexec.modules.api import StreamOutcome

NON_ZERO_EXIT_REASON = "NonZeroExitCode"
EXIT_CODE_CAUSE = "ExitCode"


def classify_exit_status(raw_status: Optional[str]) -> StreamOutcome:
    """
    Classify the error channel payload of a finished exec stream.

    Args:
        raw_status: Raw text read from the error channel

    Returns:
        StreamOutcome.exited(code) or StreamOutcome.unknown(detail)
    """
    if not raw_status or not raw_status.strip():
        return StreamOutcome.unknown("stream closed without an exit status")

    try:
        status = yaml.safe_load(raw_status)
    except yaml.YAMLError:
        return StreamOutcome.unknown(f"unparseable exit status: {raw_status.strip()}")

    if not isinstance(status, dict):
        return StreamOutcome.unknown(f"unexpected exit status: {raw_status.strip()}")

    if status.get("status") == "Success":
        return StreamOutcome.exited(0)

    if status.get("reason") == NON_ZERO_EXIT_REASON:
        exit_code = _exit_code_from_causes(status.get("details"))
        if exit_code is not None:
            return StreamOutcome.exited(exit_code)

    return StreamOutcome.unknown(status.get("message") or raw_status.strip())


def _exit_code_from_causes(details: Any) -> Optional[int]:
    if not isinstance(details, dict):
        return None

    for cause in details.get("causes") or []:
        if not isinstance(cause, dict) or cause.get("reason") != EXIT_CODE_CAUSE:
            continue
        try:
            exit_code = int(str(cause.get("message")).strip())
        except ValueError:
            return None
        return exit_code if exit_code >= 0 else None

    return None
