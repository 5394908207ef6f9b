"""Streaming filters: one output per input sample.

Includes:
- Window extrema: Min, Max, Bounds
- Robust smoothing: Median, Hampel
- Convolution: Convolve, savitzky_golay
- Means: Mean, MeanVariance, ExpMean, ExpMeanVariance, ExpMedian
- Observers: Kalman, AlphaBeta
- Wavelets: Analyze, Synthesize, Decomposition, daubechies
- Classifiers: Debounce, Schmitt, Threshold, Slopes, Peaks
- Glue: Identity, Delay, Differentiate, Integrate, Cache and arithmetic
"""

from .basic import Cache, Delay, Differentiate, Identity, Integrate
from .bounds import Bounds, Max, Min
from .classify import Debounce, Peak, Peaks, Schmitt, Slope, Slopes, Threshold
from .convolve import SAVITZKY_GOLAY, Convolve, savitzky_golay
from .exp import ExpMean, ExpMeanVariance, ExpMedian
from .hampel import Hampel
from .mean import Mean, MeanVariance, MeanVarianceOutput
from .median import Median
from .observe import AlphaBeta, Kalman
from .ops import Add, Div, Mul, Neg, Rem, Square, Sub
from .wavelet import DAUBECHIES, Analyze, Decomposition, Synthesize, daubechies

__all__ = [
    # Window extrema
    "Min",
    "Max",
    "Bounds",
    # Robust smoothing
    "Median",
    "Hampel",
    # Convolution
    "Convolve",
    "savitzky_golay",
    "SAVITZKY_GOLAY",
    # Means
    "Mean",
    "MeanVariance",
    "MeanVarianceOutput",
    "ExpMean",
    "ExpMeanVariance",
    "ExpMedian",
    # Observers
    "Kalman",
    "AlphaBeta",
    # Wavelets
    "Analyze",
    "Synthesize",
    "Decomposition",
    "daubechies",
    "DAUBECHIES",
    # Classifiers
    "Debounce",
    "Schmitt",
    "Threshold",
    "Slopes",
    "Slope",
    "Peaks",
    "Peak",
    # Glue
    "Identity",
    "Delay",
    "Differentiate",
    "Integrate",
    "Cache",
    "Add",
    "Sub",
    "Mul",
    "Div",
    "Rem",
    "Neg",
    "Square",
]
