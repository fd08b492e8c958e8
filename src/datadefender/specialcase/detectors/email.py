from __future__ import annotations
import logging
import re
from typing import Optional
from ...metadata import FileMatchMetaData
from ..base import Carrier, SpecialCase

log = logging.getLogger(__name__)

# local-part@domain, final label of at least two letters; syntax only, no DNS/MX lookup.
# Domain labels are alphanumeric with inner hyphens; ASCII only.
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"
EMAIL_RE = re.compile(rf"^[\w+-]+(\.[\w+-]+)*@(?:{_LABEL}\.)+[A-Za-z]{{2,}}$", re.ASCII)

def is_valid_email(value: str) -> bool:
    return EMAIL_RE.fullmatch(value) is not None

class EmailDetector(SpecialCase):
    name = "email"

    def detect(self, metadata: Carrier, text: Optional[str]) -> Optional[Carrier]:
        value = text or ""
        # file scans are logged verbosely, column sampling only at debug level
        level = logging.INFO if isinstance(metadata, FileMatchMetaData) else logging.DEBUG
        log.log(level, "Trying to find email in %s : %s", metadata, value)
        if is_valid_email(value):
            log.log(level, "Email detected: %s", value)
            return self._stamp(metadata, 1.0)
        log.log(level, "Email %s is not valid", value)
        return None
