import json
import sys
from pathlib import Path

from pnl_sim.advisory.client import AdvisoryClient
from pnl_sim.baseline.statement import baseline_from_dict
from pnl_sim.exports.serialize import scenario_to_dict
from pnl_sim.projection.engine import project
from pnl_sim.projection.scenario import params_from_dict

USAGE = "Usage: python -m pnl_sim.cli <scenario.json> [--advise]"


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    advise = "--advise" in args
    args = [a for a in args if a != "--advise"]
    if len(args) != 1:
        print(USAGE, file=sys.stderr)
        sys.exit(2)
    try:
        data = json.loads(Path(args[0]).read_text())
        if not isinstance(data, dict):
            raise ValueError("scenario file must hold a JSON object")
        baseline = baseline_from_dict(data.get("baseline") or {})
        params = params_from_dict(data.get("params") or {})
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    projected = project(baseline, params)
    out = scenario_to_dict(params, projected)
    if advise:
        result = AdvisoryClient().analyze(params, projected)
        out["advisory"] = {"text": result.text, "available": result.available}
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    main()
