"""Scalar recursive observers: Kalman filter and alpha-beta tracker.

Both estimate a hidden scalar state from a stream of noisy measurements
with an explicit predict/correct step per sample. The first measurement
initialises the estimate.

References:
    - Kalman (1960): A New Approach to Linear Filtering and Prediction Problems
    - Brookner (1998): Tracking and Kalman Filtering Made Easy
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from pipedsp.core.stage import Filter


@dataclass
class KalmanState:
    """Estimate covariance and current estimate (None before any input)."""

    cov: float = 0.0
    value: Optional[Any] = None


class Kalman(Filter):
    """One-dimensional Kalman filter.

    Model:
        x_k = a * x_{k-1} + b * u_k + w_k    (state equation)
        z_k = c * x_k + v_k                  (measurement equation)

    Attributes:
        r: Process noise covariance.
        q: Measurement noise covariance.
        a: State transition gain.
        b: Control gain.
        c: Measurement gain (non-zero).

    ``filter`` takes either a measurement ``z`` (control ``u = 0``) or a
    ``(z, u)`` pair.

    Example:
        >>> f = Kalman(r=0.0001, q=0.001)
        >>> [round(f.filter(z), 3) for z in [0.0, 1.0, 7.0]]
        [0.0, 0.524, 3.012]
    """

    @dataclass(frozen=True)
    class Config:
        r: float = 1.0
        q: float = 1.0
        a: float = 1.0
        b: float = 0.0
        c: float = 1.0

        def __post_init__(self) -> None:
            if self.c == 0:
                raise ValueError("Measurement gain c must be non-zero")

    def _initial_state(self, config: "Kalman.Config") -> KalmanState:
        return KalmanState()

    @property
    def value(self) -> Optional[Any]:
        return self._state.value

    @property
    def covariance(self) -> float:
        return self._state.cov

    def filter(self, input: Any) -> Any:
        if isinstance(input, tuple):
            measurement, control = input
        else:
            measurement, control = input, 0.0
        return self.observe(measurement, control)

    def observe(self, measurement: Any, control: Any = 0.0) -> Any:
        """Run one predict/correct step and return the new estimate."""
        config = self._config
        state = self._state

        if state.value is None:
            state.value = measurement / config.c
            state.cov = config.q / (config.c * config.c)
            return state.value

        # Predict: x_hat = a * x + b * u, P_hat = a * P * a + r
        predicted = config.a * state.value + config.b * control
        predicted_cov = config.a * state.cov * config.a + config.r

        # Correct with gain k = P_hat * c / (P_hat * c^2 + q)
        gain = predicted_cov * config.c / (predicted_cov * config.c * config.c + config.q)
        state.value = predicted + gain * (measurement - config.c * predicted)
        state.cov = predicted_cov - gain * config.c * predicted_cov
        return state.value


@dataclass
class AlphaBetaState:
    velocity: Any = 0.0
    value: Optional[Any] = None


class AlphaBeta(Filter):
    """Alpha-beta tracker estimating position and velocity.

    Args:
        alpha: Position correction gain.
        beta: Velocity correction gain.
    """

    @dataclass(frozen=True)
    class Config:
        alpha: float = 0.5
        beta: float = 0.125

    def _initial_state(self, config: "AlphaBeta.Config") -> AlphaBetaState:
        return AlphaBetaState()

    @property
    def velocity(self) -> Any:
        return self._state.velocity

    def filter(self, input: Any) -> Any:
        state = self._state
        if state.value is None:
            state.value = input
            return input

        predicted = state.value + state.velocity
        residual = input - predicted
        state.value = predicted + self._config.alpha * residual
        state.velocity = state.velocity + self._config.beta * residual
        return state.value
