from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from .evaluator import evaluate
from .parser import parse
from .rng import DieSource, RecordingSource, default_source


def _now_utc_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def roll_from_text(text: str, source: DieSource | None = None) -> dict[str, Any]:
    """Parse, validate, then roll. Raises DiceError for invalid input."""

    expression = parse(text)

    inner = source if source is not None else default_source()
    recorder = RecordingSource(inner)
    results = evaluate(expression, recorder)

    if results:
        explanation = f"{expression.normalized_expression} => {', '.join(str(r) for r in results)}"
    else:
        explanation = f"{expression.normalized_expression} => no repetitions"

    return {
        "request_id": uuid.uuid4().hex,
        "timestamp": _now_utc_iso(),
        "input": text,
        "normalized_expression": expression.normalized_expression,
        "rng": {
            "source": type(inner).__name__,
            "nonce": str(uuid.uuid4()),
        },
        "repetitions": len(results),
        "results": results,
        "rolls": list(recorder.draws),
        "explanation": explanation,
    }
