import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict

from astrocore import config
from astrocore.schemas import (
    BiorhythmRequest,
    ChartInput,
    CompatibilityRequest,
    LunarCalendarRequest,
    PersonalCodeRequest,
)
from astrocore.services.biorhythm import biorhythm
from astrocore.services.chart import build_chart
from astrocore.services.compatibility import synastry
from astrocore.services.composite import composite_chart
from astrocore.services.ephem import EphemerisUnavailableError, SwissEphemeris
from astrocore.services.lots import part_of_fortune_for_chart
from astrocore.services.lunar import monthly_calendar
from astrocore.services.patterns import detect_all_patterns
from astrocore.services.personal_code import personal_code_for_chart
from astrocore.services.stelliums import detect_stelliums


def run_chart(data: Dict[str, Any]) -> Dict[str, Any]:
    chart = build_chart(SwissEphemeris(), ChartInput(**data))
    lot = part_of_fortune_for_chart(chart)
    out = chart.as_dict()
    out["stelliums"] = [s.as_dict() for s in detect_stelliums(chart.bodies)]
    out["patterns"] = [p.as_dict() for p in detect_all_patterns(chart.bodies)["all"]]
    out["part_of_fortune"] = lot.as_dict() if lot else None
    return out


def run_compatibility(data: Dict[str, Any]) -> Dict[str, Any]:
    req = CompatibilityRequest(**data)
    provider = SwissEphemeris()
    chart_a = build_chart(provider, req.person_a)
    chart_b = build_chart(provider, req.person_b)
    out = synastry(chart_a, chart_b).as_dict()
    if req.include_composite:
        out["composite"] = composite_chart(chart_a, chart_b).as_dict()
    return out


def run_personal_code(data: Dict[str, Any]) -> Dict[str, Any]:
    req = PersonalCodeRequest(**data)
    chart = build_chart(SwissEphemeris(), req.chart)
    return personal_code_for_chart(chart, req.purpose, req.digit_count).as_dict()


def run_lunar_calendar(data: Dict[str, Any]) -> Dict[str, Any]:
    req = LunarCalendarRequest(**data)
    provider = SwissEphemeris()
    natal_houses = build_chart(provider, req.natal).houses if req.natal else None
    days = monthly_calendar(provider, req.year, req.month, natal_houses)
    return {"year": req.year, "month": req.month, "days": [d.as_dict() for d in days]}


def run_biorhythm(data: Dict[str, Any]) -> Dict[str, Any]:
    req = BiorhythmRequest(**data)
    return biorhythm(req.birth_date, req.target_date).as_dict()


OPERATIONS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "chart": run_chart,
    "compatibility": run_compatibility,
    "personal_code": run_personal_code,
    "lunar_calendar": run_lunar_calendar,
    "biorhythm": run_biorhythm,
}


def run(request: Dict[str, Any]) -> Dict[str, Any]:
    op = request.get("operation")
    handler = OPERATIONS.get(op)
    if handler is None:
        raise ValueError(f"unknown operation: {op!r}; expected one of {sorted(OPERATIONS)}")
    payload = {k: v for k, v in request.items() if k != "operation"}
    return handler(payload)


def main() -> None:
    config.configure_logging()
    in_path = Path(sys.argv[1])
    out_path = Path(sys.argv[2])
    data = json.loads(in_path.read_text(encoding="utf-8"))
    try:
        output = run(data)
    except ValueError as exc:  # includes pydantic ValidationError and PersonalCodeError
        print(f"Invalid request: {exc}", file=sys.stderr)
        sys.exit(2)
    except EphemerisUnavailableError as exc:
        print(f"Ephemeris unavailable: {exc}", file=sys.stderr)
        sys.exit(3)
    out_path.write_text(json.dumps(output, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote result → {out_path}")


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python cli.py request.json output.json")
        sys.exit(1)
    main()
