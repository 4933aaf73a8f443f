"""
FitzHugh-Nagumo Integrator
==========================
Fixed-step, classical 4th-order Runge-Kutta for

    dv/dt = v - v^3/3 - w + I
    dw/dt = epsilon * (v + a - b*w)

The step is total over finite inputs (the model is not stiff in the exposed
parameter ranges), so there is no error path.
"""
from __future__ import annotations

import logging
from typing import List, Tuple

from phasetube.model.state import SimState, Parameters

logger = logging.getLogger(__name__)


def derivatives(v: float, w: float, params: Parameters) -> Tuple[float, float]:
    """Right-hand side of the model at (v, w)."""
    dv = v - v ** 3 / 3.0 - w + params.current
    dw = params.epsilon * (v + params.a - params.b * w)
    return dv, dw


def step(state: SimState, params: Parameters) -> SimState:
    """
    Advances the state by one `params.dt`.

    Args:
        state: Current state. Not modified.
        params: Model constants. Not modified.

    Returns:
        The state after one RK4 step.
    """
    dt = params.dt
    v, w = state.v, state.w

    k1v, k1w = derivatives(v, w, params)
    k2v, k2w = derivatives(v + dt * k1v / 2, w + dt * k1w / 2, params)
    k3v, k3w = derivatives(v + dt * k2v / 2, w + dt * k2w / 2, params)
    k4v, k4w = derivatives(v + dt * k3v, w + dt * k3w, params)

    return SimState(
        v=v + dt * (k1v + 2 * k2v + 2 * k3v + k4v) / 6.0,
        w=w + dt * (k1w + 2 * k2w + 2 * k3w + k4w) / 6.0,
        t=state.t + dt,
    )


def integrate(state: SimState, params: Parameters, n_steps: int) -> List[SimState]:
    """
    Runs `n_steps` consecutive steps.

    Returns:
        The n successive states (the starting state is not included).
    """
    states: List[SimState] = []
    for _ in range(n_steps):
        state = step(state, params)
        states.append(state)
    return states
