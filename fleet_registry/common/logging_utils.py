# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Secure logging utilities for the fleet registry.

Tenant-scoped events are logged with sensitive data (IP addresses, tokens,
secrets, e-mails) redacted and tenant identifiers truncated.
"""

import logging
import re
import traceback
from typing import Optional

# ---------------------------------------------------------------------------
# Sensitive-data redaction patterns
# ---------------------------------------------------------------------------
_SENSITIVE_PATTERNS = [
    # IPv4 addresses  (e.g. 192.168.1.100)
    (re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b"), "<REDACTED_IP>"),
    # JWT / Bearer tokens  (three base64url segments separated by dots)
    (re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"), "<REDACTED_TOKEN>"),
    # Authorization header values
    (re.compile(r"(?i)(bearer\s+)[A-Za-z0-9_\-\.]+"), r"\1<REDACTED_TOKEN>"),
    # password= or secret= or api_key= or token= values
    (re.compile(
        r"(?i)((?:password|passwd|secret|api_key|apikey|token)"
        r"\s*[=:]\s*)[^\s,;\"']+"
    ), r"\1<REDACTED>"),
    # Email addresses
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "<REDACTED_EMAIL>"),
]

_IDENTIFIER_PREFIX = 8


def sanitize_message(message: str) -> str:
    """Redact sensitive data from a log message."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)
    return message


def mask_identifier(identifier: Optional[str]) -> str:
    """Keep only the first characters of an opaque identifier."""
    if not identifier:
        return "-"
    if len(identifier) <= _IDENTIFIER_PREFIX:
        return identifier
    return f"{identifier[:_IDENTIFIER_PREFIX]}..."


def log_secure_info(
    level: str,
    message: str,
    org_id: Optional[str] = None,
    exc_info: bool = False,
    logger: Optional[logging.Logger] = None,
) -> None:
    """Log a tenant-scoped message after redacting sensitive data.

    Args:
        level: ``'info'``, ``'warning'``, ``'error'``, ``'debug'``, or ``'critical'``.
        message: Human-readable log message.
        org_id: Tenant the event belongs to; only a prefix is kept.
        exc_info: Append the current exception traceback.
        logger: Logger to write to; defaults to this module's logger.
    """
    logger = logger or logging.getLogger(__name__)

    log_message = message
    if org_id is not None:
        log_message = f"[org {mask_identifier(org_id)}] {log_message}"
    if exc_info:
        log_message = f"{log_message}\n{traceback.format_exc().rstrip()}"

    log_message = sanitize_message(log_message)

    log_func = getattr(logger, level, logger.info)
    log_func(log_message)
