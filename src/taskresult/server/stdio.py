"""stdio server mode — JSON line-delimited protocol over stdin/stdout."""

from __future__ import annotations

import json
import sys
from typing import Any, Callable, TextIO

from taskresult.data.facilities import facility_name
from taskresult.engine.translator import translate, translate_many
from taskresult.io.fileops import extract_code
from taskresult.observe.events import EventEmitter


class StdioServer:
    """Simple JSON-RPC-like server over stdin/stdout.

    Commands: ``translate`` (``args.code``), ``translate.batch``
    (``args.codes``), ``facility.get`` (``args.facility_code``).
    """

    def __init__(
        self,
        lookup: Callable[[int], str | None] | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self.lookup = lookup
        self.events = events

    def handle_request(self, request: dict[str, Any]) -> dict[str, Any]:
        req_id = request.get("id", "")
        command = request.get("command", "")
        args = request.get("args")
        if args is None:
            args = {}
        if not isinstance(args, dict):
            return {"id": req_id, "ok": False, "error": "'args' must be an object"}

        try:
            if command == "translate":
                result = translate(extract_code(args.get("code")), lookup=self.lookup, events=self.events)
                return {"id": req_id, "ok": True, "result": result.to_output() if result else None}

            elif command == "translate.batch":
                codes = args.get("codes")
                if not isinstance(codes, list):
                    return {"id": req_id, "ok": False, "error": "'codes' must be an array"}
                results = translate_many(
                    [extract_code(c) for c in codes], lookup=self.lookup, events=self.events,
                )
                return {"id": req_id, "ok": True, "result": [r.to_output() for r in results]}

            elif command == "facility.get":
                code = args.get("facility_code")
                if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code <= 0x1FFF:
                    return {"id": req_id, "ok": False, "error": "'facility_code' must be an integer 0-8191"}
                return {"id": req_id, "ok": True, "result": {"FacilityCode": code, "CanonicalName": facility_name(code)}}

            return {"id": req_id, "ok": False, "error": f"Unknown command: {command}"}
        except Exception as e:
            return {"id": req_id, "ok": False, "error": str(e)}

    def run(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        """Main server loop: read JSON lines from stdin, write responses to stdout."""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        for line in stdin:
            line = line.strip()
            if not line:
                continue
            try:
                request = json.loads(line)
            except json.JSONDecodeError as e:
                response = {"ok": False, "error": f"Invalid JSON: {e}"}
            else:
                if isinstance(request, dict):
                    response = self.handle_request(request)
                else:
                    response = {"ok": False, "error": "Request must be a JSON object"}
            stdout.write(json.dumps(response) + "\n")
            stdout.flush()
