"""Two-channel wavelet analysis and synthesis.

``Analyze`` splits every input sample into a low-pass and a high-pass
response using two independent ``Convolve`` stages. ``Synthesize`` runs
the mirror filter pair over a stream of decompositions and sums the two
channels. No down-sampling takes place: with Daubechies coefficients the
synthesis of an analysis reproduces the input delayed by ``width - 1``
samples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Tuple

import numpy as np

from pipedsp.core.stage import Filter
from pipedsp.filters.convolve import Convolve, ConvolveConfig

# Daubechies scaling coefficients by filter width (unnormalised).
DAUBECHIES: Dict[int, Tuple[float, ...]] = {
    2: (0.7071067812, 0.7071067812),
    4: (0.4829629131, 0.8365163037, 0.2241438680, -0.1294095226),
    6: (
        0.3326705530, 0.8068915093, 0.4598775021,
        -0.1350110200, -0.0854412739, 0.0352262919,
    ),
    8: (
        0.2303778133, 0.7148465706, 0.6308807679, -0.0279837694,
        -0.1870348117, 0.0308413818, 0.0328830117, -0.0105974018,
    ),
    10: (
        0.1601023980, 0.6038292698, 0.7243085284, 0.1384281459, -0.2422948871,
        -0.0322448696, 0.0775714938, -0.0062414902, -0.0125807520, 0.0033357253,
    ),
    12: (
        0.1115407434, 0.4946238904, 0.7511339080, 0.3152503517,
        -0.2262646940, -0.1297668676, 0.0975016056, 0.0275228655,
        -0.0315820393, 0.0005538422, 0.0047772575, -0.0010773011,
    ),
    14: (
        0.0778520541, 0.3965393195, 0.7291320908, 0.4697822874, -0.1439060039,
        -0.2240361850, 0.0713092193, 0.0806126092, -0.0380299369, -0.0165745416,
        0.0125509986, 0.0004295780, -0.0018016407, 0.0003537138,
    ),
    16: (
        0.0544158422, 0.3128715909, 0.6756307363, 0.5853546837,
        -0.0158291053, -0.2840155430, 0.0004724846, 0.1287474266,
        -0.0173693010, -0.0440882539, 0.0139810279, 0.0087460940,
        -0.0048703530, -0.0003917404, 0.0006754494, -0.0001174768,
    ),
    18: (
        0.0380779474, 0.2438346746, 0.6048231237, 0.6572880780, 0.1331973858,
        -0.2932737833, -0.0968407832, 0.1485407493, 0.0307256815, -0.0676328291,
        0.0002509471, 0.0223616621, -0.0047232048, -0.0042815037, 0.0018476469,
        0.0002303858, -0.0002519632, 0.0000393473,
    ),
    20: (
        0.0266700579, 0.1881768001, 0.5272011889, 0.6884590395, 0.2811723437,
        -0.2498464243, -0.1959462744, 0.1273693403, 0.0930573646, -0.0713941472,
        -0.0294575368, 0.0332126741, 0.0036065536, -0.0107331755, 0.0013953517,
        0.0019924053, -0.0006858567, -0.0001164669, 0.0000935887, -0.0000132642,
    ),
}


class Decomposition(NamedTuple):
    """Low-pass and high-pass response to a single input sample."""

    low: Any
    high: Any


def daubechies(width: int) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    """Derive the Daubechies analysis filter pair for ``width``.

    The low-pass table is normalised to unit sum. The high-pass filter is
    its quadrature mirror: the normalised low-pass reversed, with every
    odd-indexed coefficient negated.

    Args:
        width: Even filter width between 2 and 20.

    Returns:
        ``(low_pass, high_pass)`` coefficient tuples.

    Raises:
        ValueError: If no coefficient table exists for ``width``.
    """
    if width not in DAUBECHIES:
        raise ValueError(
            f"No Daubechies coefficients for width {width}; "
            f"supported widths are {sorted(DAUBECHIES)}"
        )
    low_pass = np.asarray(DAUBECHIES[width], dtype=float)
    total = low_pass.sum()
    if total != 0.0:
        low_pass = low_pass / total
    high_pass = low_pass[::-1].copy()
    high_pass[1::2] = -high_pass[1::2]
    return tuple(low_pass.tolist()), tuple(high_pass.tolist())


@dataclass(frozen=True)
class WaveletConfig:
    """Coefficients of the low-pass and high-pass channels."""

    low_pass: ConvolveConfig = field(default_factory=ConvolveConfig)
    high_pass: ConvolveConfig = field(default_factory=ConvolveConfig)

    def __post_init__(self) -> None:
        if not isinstance(self.low_pass, ConvolveConfig):
            object.__setattr__(self, "low_pass", ConvolveConfig(tuple(self.low_pass)))
        if not isinstance(self.high_pass, ConvolveConfig):
            object.__setattr__(self, "high_pass", ConvolveConfig(tuple(self.high_pass)))
        if self.low_pass.width != self.high_pass.width:
            raise ValueError(
                f"low_pass and high_pass must have equal widths, got "
                f"{self.low_pass.width} and {self.high_pass.width}"
            )

    @property
    def width(self) -> int:
        return self.low_pass.width


class Analyze(Filter):
    """Split each input into a ``Decomposition`` of low and high bands.

    Example:
        >>> f = Analyze.daubechies(2)
        >>> [tuple(round(v, 3) for v in f.filter(x)) for x in [0.0, 1.0, 7.0]]
        [(0.0, 0.0), (0.5, 0.5), (4.0, 3.0)]
    """

    Config = WaveletConfig

    def _initial_state(self, config: WaveletConfig) -> Tuple[Convolve, Convolve]:
        return Convolve(config.low_pass), Convolve(config.high_pass)

    @classmethod
    def daubechies(cls, width: int) -> "Analyze":
        low_pass, high_pass = daubechies(width)
        return cls(low_pass=low_pass, high_pass=high_pass)

    def filter(self, input: Any) -> Decomposition:
        low_pass, high_pass = self._state
        return Decomposition(low_pass.filter(input), high_pass.filter(input))


class Synthesize(Filter):
    """Recombine a stream of decompositions into a single signal.

    Accepts ``Decomposition`` values or plain ``(low, high)`` pairs.
    """

    Config = WaveletConfig

    def _initial_state(self, config: WaveletConfig) -> Tuple[Convolve, Convolve]:
        return Convolve(config.low_pass), Convolve(config.high_pass)

    @classmethod
    def daubechies(cls, width: int) -> "Synthesize":
        """Synthesis pair matching ``Analyze.daubechies(width)``.

        Both analysis filters are applied in reverse order.
        """
        low_pass, high_pass = daubechies(width)
        return cls(low_pass=low_pass[::-1], high_pass=high_pass[::-1])

    def filter(self, input: Any) -> Any:
        low, high = input
        low_pass, high_pass = self._state
        return low_pass.filter(low) + high_pass.filter(high)
