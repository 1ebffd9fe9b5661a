"""
Reporters: where run events and result tables go.

`TextReporter` prints the tables the benchmark client has always printed
(a header row of names over a row of values, or the bare value row when
headers are off); `JsonReporter` collects the same events and sections into a
dict for machine consumption.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, TextIO

from harness.interfaces import Reporter


_MESSAGES = {
    "invalid_size": "Invalid value in arguments ...",
    "quick_return": "Quick return ...",
    "mem_query": "Calculated dynamic memory size: {size} bytes",
}


def _fmt(v: Any) -> str:
    if isinstance(v, float):
        return f"{v:.6g}"
    return str(v)


class TextReporter:
    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def _print(self, s: str) -> None:
        print(s, file=self.stream, flush=True)

    def inform(self, event: str, **fields: Any) -> None:
        msg = _MESSAGES.get(event)
        if msg is None:
            raise KeyError(f"unknown report event: {event}")
        self._print(msg.format(**fields))

    def section(self, title: str, values: Mapping[str, Any], *, header: bool = True) -> None:
        cells = [(str(k), _fmt(v)) for k, v in values.items()]
        width = [max(len(k), len(v)) + 2 for k, v in cells]
        if header:
            self._print("")
            self._print(f"{title}:")
            self._print("".join(k.ljust(w) for (k, _), w in zip(cells, width)).rstrip())
        self._print("".join(v.ljust(w) for (_, v), w in zip(cells, width)).rstrip())


class JsonReporter:
    def __init__(self) -> None:
        self.events: List[Dict[str, Any]] = []
        self.sections: Dict[str, Dict[str, Any]] = {}

    def inform(self, event: str, **fields: Any) -> None:
        if event not in _MESSAGES:
            raise KeyError(f"unknown report event: {event}")
        self.events.append({"event": str(event), **fields})

    def section(self, title: str, values: Mapping[str, Any], *, header: bool = True) -> None:
        self.sections[str(title)] = dict(values)

    def to_json_dict(self) -> Dict[str, Any]:
        return {"events": list(self.events), "sections": dict(self.sections)}

    def write(self, path: Path, *, extra: Optional[Mapping[str, Any]] = None) -> None:
        payload = self.to_json_dict()
        if extra:
            payload.update(extra)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


class MultiReporter:
    def __init__(self, *reporters: Reporter) -> None:
        self.reporters = list(reporters)

    def inform(self, event: str, **fields: Any) -> None:
        for r in self.reporters:
            r.inform(event, **fields)

    def section(self, title: str, values: Mapping[str, Any], *, header: bool = True) -> None:
        for r in self.reporters:
            r.section(title, values, header=header)


__all__ = ["TextReporter", "JsonReporter", "MultiReporter"]
