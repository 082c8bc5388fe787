# base.py

from __future__ import annotations

import functools
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np

from pyadaptfilt._utils.metrics import db10, tail_mse
from pyadaptfilt._utils.typing import ArrayLike
from pyadaptfilt._utils.weights import WeightsFill, init_weights
from pyadaptfilt._utils.windows import causal_windows
from pyadaptfilt.errors import InvalidArgumentError, UninitializedStateError


@dataclass
class OptimizationResult:
    """Standard output container for an adaptation run.

    Attributes
    ----------
    outputs:
        Filter output y[k] for every input sample.
    errors:
        A priori error e[k] = d[k] - y[k].
    coefficients:
        Coefficient history, shape (N + 1, n_taps); row 0 holds the weights
        before the run and row -1 the final weights.
    algorithm:
        Algorithm name (class name).
    runtime_ms:
        Runtime in milliseconds.
    error_type:
        Error semantics tag. Every filter here reports "a_priori".
    extra:
        Optional container for internal states (``return_internal_states=True``).
    """

    outputs: np.ndarray
    errors: np.ndarray
    coefficients: np.ndarray
    algorithm: str
    runtime_ms: float
    error_type: str = "a_priori"
    extra: Optional[Dict[str, Any]] = None

    def mse(self) -> np.ndarray:
        """Instantaneous squared error."""
        return np.abs(self.errors) ** 2

    def __repr__(self) -> str:
        return f"<OptimizationResult algo={self.algorithm} samples={len(self.outputs)}>"


def _as_signal(signal: Any, name: str) -> np.ndarray:
    if signal is None:
        raise InvalidArgumentError(f"{name} signal cannot be null, or with size 0")
    arr = np.ravel(np.asarray(signal))
    if arr.size == 0:
        raise InvalidArgumentError(f"{name} signal cannot be null, or with size 0")
    if np.iscomplexobj(arr):
        raise InvalidArgumentError(f"{name} signal must be real-valued")
    try:
        return arr.astype(float)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"{name} signal must be numeric") from exc


def validate_input(method: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to validate and normalize ``filter`` inputs.

    Accepts the calling styles:

        filter(desired, x, **kwargs)
        filter(desired_signal=..., input_signal=..., **kwargs)
        filter(d=..., x=..., **kwargs)

    Notes
    -----
    - Signals are converted with ``np.asarray``, flattened and cast to float.
    - Null/empty signals, complex data, a length mismatch, or a filter longer
      than the signal raise InvalidArgumentError before the run starts.
    """
    sig = inspect.signature(method)
    param_names = set(sig.parameters.keys())

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        desired_signal = None
        input_signal = None

        if len(args) >= 1:
            desired_signal = args[0]
        if len(args) >= 2:
            input_signal = args[1]
        if len(args) > 2:
            raise TypeError(f"{method.__name__}() takes the desired and input signals positionally; "
                            f"pass other options by keyword")

        if "desired_signal" in kwargs:
            desired_signal = kwargs.pop("desired_signal")
        if "input_signal" in kwargs:
            input_signal = kwargs.pop("input_signal")

        if "d" in kwargs and "d" not in param_names:
            desired_signal = kwargs.pop("d")
        if "x" in kwargs and "x" not in param_names:
            input_signal = kwargs.pop("x")

        d = _as_signal(desired_signal, "Desired")
        x = _as_signal(input_signal, "Input")

        if x.shape[0] != d.shape[0]:
            raise InvalidArgumentError(
                f"The length of the desired signal ({d.shape[0]}) and input signal ({x.shape[0]}) must be equal."
            )
        if self.filter_length > x.shape[0]:
            raise InvalidArgumentError(
                f"Filter length ({self.filter_length}) must not be greater than the signal length ({x.shape[0]})"
            )

        return method(self, d, x, **kwargs)

    return wrapper


class AdaptiveFilter(ABC):
    """Abstract base class for all adaptive filters.

    Holds the weight vector, the shared run loop and the result accessors.
    Subclasses implement one adaptation step in ``_step`` and, when they carry
    recursive state, ``_reset_state``.

    Parameters
    ----------
    filter_length:
        Number of taps N. Ignored in favour of ``len(w_init)`` when weights are
        given (a mismatch is an error).
    w_init:
        Initial weight vector. Copied; the caller's array is never mutated.
    fill:
        ``WeightsFill.ZEROS`` or ``WeightsFill.RANDOM`` (or their names), used
        when ``w_init`` is None.
    """

    def __init__(
        self,
        filter_length: Optional[int] = None,
        w_init: Optional[ArrayLike] = None,
        fill: Union[WeightsFill, str] = WeightsFill.ZEROS,
    ) -> None:
        self.w: np.ndarray = init_weights(filter_length, w_init, fill)
        self.filter_length: int = int(self.w.size)
        self._w0: np.ndarray = self.w.copy()

        self.output: Optional[np.ndarray] = None
        self.error: Optional[np.ndarray] = None

    @abstractmethod
    def _step(self, x_k: np.ndarray, d_k: float) -> Tuple[float, float]:
        """Adapt on one window/desired pair; return (output, error)."""
        raise NotImplementedError

    def _reset_state(self) -> None:
        """Reset variant-specific recursive state. No-op for stateless filters."""

    def _internal_states(self) -> Dict[str, Any]:
        return {}

    @validate_input
    def filter(
        self,
        desired_signal: np.ndarray,
        input_signal: np.ndarray,
        verbose: bool = False,
        return_internal_states: bool = False,
    ) -> OptimizationResult:
        """
        Run the adaptive filter over the whole signal once, in time order.

        Parameters
        ----------
        desired_signal : array_like of float
            Desired sequence ``d[k]``, shape ``(N,)`` (will be flattened).
        input_signal : array_like of float
            Input sequence ``x[k]``, same length as ``desired_signal``.
        verbose : bool, optional
            If True, prints the runtime and tail MSE after completion.
        return_internal_states : bool, optional
            If True, ``result.extra`` holds the variant's final internal state.

        Returns
        -------
        OptimizationResult
            ``outputs``/``errors`` of length ``N`` and the coefficient history.
            The same output and error are kept on the instance, see
            ``get_output`` and ``get_error``.
        """
        tic = perf_counter()

        d = desired_signal
        n_samples = int(input_signal.size)
        m = self.filter_length

        outputs = np.zeros(n_samples, dtype=float)
        errors = np.zeros(n_samples, dtype=float)
        history = np.empty((n_samples + 1, m), dtype=float)
        history[0] = self.w

        for k, x_k in enumerate(causal_windows(input_signal, m)):
            y_k, e_k = self._step(x_k, float(d[k]))
            outputs[k] = y_k
            errors[k] = e_k
            history[k + 1] = self.w

        self.output = outputs
        self.error = errors

        runtime_s = perf_counter() - tic
        if verbose:
            tail_db = float(db10(tail_mse(errors)))
            print(f"[{self.__class__.__name__}] Completed in {runtime_s * 1000:.03f} ms "
                  f"| tail_mse={tail_db:.2f} dB")

        extra = self._internal_states() if return_internal_states else None

        return OptimizationResult(
            outputs=outputs.copy(),
            errors=errors.copy(),
            coefficients=history,
            algorithm=self.__class__.__name__,
            runtime_ms=float(runtime_s) * 1000.0,
            error_type="a_priori",
            extra=extra,
        )

    def optimize(
        self,
        input_signal: ArrayLike,
        desired_signal: ArrayLike,
        **kwargs: Any,
    ) -> OptimizationResult:
        """Same as ``filter`` with the input signal first."""
        return self.filter(desired_signal, input_signal, **kwargs)

    def filter_signal(self, input_signal: ArrayLike) -> np.ndarray:
        """Filter a signal with the current weights, without adapting them.

        Uses the same windows as ``filter``: ``y[k] = w . x_k``.
        """
        x = _as_signal(input_signal, "Input")
        m = self.filter_length
        taps = self._window_taps()
        y = np.zeros(x.size, dtype=float)
        for k, x_k in enumerate(causal_windows(x, m)):
            y[k] = float(np.dot(taps, x_k))
        return y

    def _window_taps(self) -> np.ndarray:
        """Weights aligned with oldest-first windows."""
        return self.w

    def _check_output(self) -> None:
        if self.output is None:
            raise UninitializedStateError("Execute filter() function before returning result")

    def get_weights(self) -> np.ndarray:
        """Final weights of the most recent run."""
        self._check_output()
        return self.w.copy()

    def get_output(self) -> np.ndarray:
        """Filter output over the entire signal of the most recent run."""
        self._check_output()
        return self.output.copy()

    def get_error(self) -> np.ndarray:
        """Error (desired minus output) over the entire signal of the most recent run."""
        self._check_output()
        return self.error.copy()

    def reset_filter(self, w_new: Optional[ArrayLike] = None) -> None:
        """Restore the initial (or given) weights and clear all run state."""
        if w_new is not None:
            self.w = init_weights(self.filter_length, w_new)
            self._w0 = self.w.copy()
        else:
            self.w = self._w0.copy()
        self.output = None
        self.error = None
        self._reset_state()

    @classmethod
    def default_test_init_kwargs(cls, length: int) -> dict:
        """Override in subclasses to provide init kwargs for standardized tests."""
        return {}
