"""File discovery.

Walks the configured directories, reads each file as text and offers every
whitespace-separated token to the special-case detectors.

Properties (filediscovery.yaml):
```yaml
directories: [/data/exports, /data/mail]   # or "a, b"
extensions: [.txt, .csv]                   # optional, default: every file
models: [email]                            # optional, default: every registered detector
```

One finding is kept per (file, model). Files are read as UTF-8 text with
undecodable bytes dropped; binary formats are not extracted.
"""

from __future__ import annotations
import logging
import os
import re
from pathlib import Path
from typing import Iterable, List, Optional
# Import specialcase to trigger auto-registration
import datadefender.specialcase  # noqa: F401
from ..metadata import FileMatchMetaData
from ..properties.loader import get_list
from ..report import print_findings
from ..specialcase.registry import detect_first
from .base import Discoverer, WorkflowContext

log = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\s,;]+")
_TOKEN_STRIP = "\"'<>()[]{}:!?."

def candidate_tokens(text: str) -> Iterable[str]:
    for raw in _SEPARATORS.split(text):
        token = raw.strip(_TOKEN_STRIP)
        if token:
            yield token

class FileDiscoverer(Discoverer):
    name = "file-discovery"

    def _resolve_files(self, directories: List[str], extensions: List[str]) -> List[Path]:
        exts = {e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions}
        files = []
        for d in directories:
            for root, _dirs, names in os.walk(d):
                for n in names:
                    if exts and Path(n).suffix.lower() not in exts:
                        continue
                    files.append(Path(root) / n)
        return sorted(files)

    def scan_file(self, path: Path, models: Optional[List[str]] = None) -> List[FileMatchMetaData]:
        text = path.read_text(encoding="utf-8", errors="ignore")
        found = {}
        for token in candidate_tokens(text):
            meta = FileMatchMetaData(directory=str(path.parent), file_name=path.name)
            hit = detect_first(meta, token, models)
            if hit is not None and hit.model not in found:
                found[hit.model] = hit
        return list(found.values())

    def run(self, ctx: WorkflowContext) -> List[FileMatchMetaData]:
        directories = get_list(ctx.properties, "directories")
        models = get_list(ctx.properties, "models") or None
        files = self._resolve_files(directories, get_list(ctx.properties, "extensions"))
        log.info("Scanning %d file(s) in %s", len(files), directories)

        for path in files:
            hits = self.scan_file(path, models)
            for h in hits:
                log.info("File %s contains %s (probability %.2f)", h.path, h.model, h.average_probability)
            self.findings.extend(hits)

        print_findings("File discovery", self.findings)
        return self.findings
