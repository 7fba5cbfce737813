from __future__ import annotations
from typing import Any, Dict, Tuple
from flask import Flask, request, jsonify, Response

import os
import time
import logging
from collections import deque, defaultdict

from pnl_sim.advisory.client import AdvisoryClient
from pnl_sim.advisory.prompt import build_prompt
from pnl_sim.baseline.statement import BaselineStatement, baseline_from_dict
from pnl_sim.config.env import get_driver_config, get_targets_config
from pnl_sim.exports.reports import VAS_SHARE_WARNING, assumptions_md, check_identities, validation_report_md
from pnl_sim.exports.serialize import projection_to_dict, round1
from pnl_sim.exports.writers import write_projection_csv
from pnl_sim.projection.bridge import compare_to_baseline, covenant_checks, ebitda_bridge
from pnl_sim.projection.engine import project
from pnl_sim.projection.result import ProjectedStatement
from pnl_sim.projection.scenario import ScenarioParams, params_from_dict, params_to_dict

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Configuration helpers (overridable via app.config in tests)

def _get_rate_limit() -> tuple[int, float]:
    n = app.config.get('RATE_LIMIT_N')
    w = app.config.get('RATE_LIMIT_WINDOW_SEC')
    if n is None:
        n = int(os.environ.get('RATE_LIMIT_N', '5'))
    if w is None:
        w = float(os.environ.get('RATE_LIMIT_WINDOW_SEC', '1.0'))
    return int(n), float(w)


def _get_advisor() -> AdvisoryClient:
    advisor = app.config.get('ADVISORY_CLIENT')
    if advisor is None:
        advisor = AdvisoryClient(targets=get_targets_config())
    return advisor

_recent: dict[str, deque[float]] = defaultdict(lambda: deque(maxlen=100))


def _client_ip() -> str:
    xff = request.headers.get('X-Forwarded-For')
    if xff:
        return xff.split(',')[0].strip()
    return request.remote_addr or 'anon'


def _check_rate_limit(ip: str):
    # Allow if rate limiting disabled or N <= 0
    n, window = _get_rate_limit()
    if n <= 0:
        return None
    now = time.time()
    dq = _recent[ip]
    while dq and now - dq[0] > window:
        dq.popleft()
    if len(dq) >= n:
        retry = max(0.0, window - (now - dq[0]))
        resp = jsonify({'error': 'rate_limited'})
        resp.status_code = 429
        resp.headers['Retry-After'] = f"{retry:.2f}"
        return resp
    dq.append(now)
    return None


@app.before_request
def _rate_limit_advisory():
    # Only the advisory route reaches the external model; projections are never limited
    if request.method == 'POST' and request.path == '/projections/advisory':
        return _check_rate_limit(_client_ip())
    return None


@app.errorhandler(ValueError)
def _bad_input(e: ValueError):
    logger.info("rejected request to %s: %s", request.path, e)
    return jsonify({'error': str(e)}), 400


def _inputs() -> Tuple[BaselineStatement, ScenarioParams, Dict[str, Any]]:
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise ValueError('request body must be a JSON object')
    if 'baseline' not in payload or 'params' not in payload:
        raise ValueError('params and baseline are required')
    return baseline_from_dict(payload['baseline']), params_from_dict(payload['params']), payload


def _rounded_rows(rows):
    return [{k: (round1(v) if isinstance(v, float) else v) for k, v in r.items()} for r in rows]


def _projection_body(b: BaselineStatement, p: ScenarioParams, m: ProjectedStatement) -> Dict[str, Any]:
    return {
        'params': params_to_dict(p),
        'projection': projection_to_dict(m),
        'bridge': _rounded_rows(ebitda_bridge(m)),
        'comparison': _rounded_rows(compare_to_baseline(b, m)),
        'checks': covenant_checks(m, get_targets_config()),
    }


@app.get('/health')
def health():
    return jsonify({'status': 'ok'})


@app.post('/projections')
def post_projection():
    b, p, _ = _inputs()
    return jsonify(_projection_body(b, p, project(b, p)))


@app.post('/projections/prompt')
def post_prompt():
    b, p, _ = _inputs()
    return jsonify({'prompt': build_prompt(p, project(b, p), get_targets_config())})


@app.post('/projections/advisory')
def post_advisory():
    b, p, payload = _inputs()
    m = project(b, p)
    body = _projection_body(b, p, m)
    custom = payload.get('prompt')
    if custom is not None and not isinstance(custom, str):
        raise ValueError('prompt must be a string')
    result = _get_advisor().analyze(p, m, custom_prompt=custom or None)
    body['advisory'] = {'text': result.text, 'available': result.available}
    return jsonify(body)


@app.post('/projections/export.csv')
def export_csv():
    b, p, _ = _inputs()
    return Response(write_projection_csv(b, project(b, p)), mimetype='text/csv', headers={
        'Content-Disposition': 'attachment; filename="projection.csv"'
    })


@app.post('/projections/report.md')
def export_report():
    b, p, _ = _inputs()
    m = project(b, p)
    checks = {**check_identities(m), **covenant_checks(m, get_targets_config())}
    body = assumptions_md(p, get_driver_config(), warnings=[VAS_SHARE_WARNING]) + "\n" + validation_report_md(
        checks, details={'valuation_multiple': m.valuation_multiple, 'capex_requirement': round1(m.capex_requirement)}
    )
    return Response(body, mimetype='text/markdown')


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=8000)
