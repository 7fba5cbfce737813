"""Projection engine.

- scenario.py: scenario levers and their ranges
- drivers.py: cost-driver models (automation, learning curve, space, scale)
- engine.py: baseline + levers -> ProjectedStatement
- bridge.py: EBITDA walk, baseline comparison, covenant checks
"""
