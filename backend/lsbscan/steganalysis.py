# Logic for detecting hidden data (chi-square attack on pixel pairs)

from enum import Enum
from typing import NamedTuple, Sequence, Tuple, List
import logging
import math

logger = logging.getLogger(__name__)

# Pixel buffers are RGBA; only the first channel of each group is read.
CHANNEL_STRIDE = 4
PAIR_STRIDE = 2 * CHANNEL_STRIDE
CATEGORIES = 255

SUSPICIOUS_THRESHOLD = 0.95
CLEAN_THRESHOLD = 0.10

# Abramowitz & Stegun 7.1.26, max error 1.5e-7
_ERF_A1 = 0.254829592
_ERF_A2 = -0.284496736
_ERF_A3 = 1.421413741
_ERF_A4 = -1.453152027
_ERF_A5 = 1.061405429
_ERF_P = 0.3275911


class ResultStatus(str, Enum):
    CLEAN = 'Clean'
    INDETERMINATE = 'Indeterminate'
    SUSPICIOUS = 'Suspicious'


STATUS_MESSAGES = {
    ResultStatus.SUSPICIOUS: 'Suspicious: High probability of hidden LSB data detected.',
    ResultStatus.INDETERMINATE: 'Indeterminate: Some statistical anomalies were found, '
                                'but results are inconclusive.',
    ResultStatus.CLEAN: 'Likely Clean: No significant statistical signs of LSB steganography found.',
}


class AnalysisResult(NamedTuple):
    probability: float
    message: str
    status: ResultStatus

    def to_dict(self) -> dict:
        return {
            'probability': self.probability,
            'message': self.message,
            'status': self.status.value,
        }


def erf(x: float) -> float:
    """Error function approximation, accurate to about 1.5e-7 for all real x."""
    sign = 1 if x >= 0 else -1
    abs_x = abs(x)
    t = 1.0 / (1.0 + _ERF_P * abs_x)
    y = 1.0 - (((((_ERF_A5 * t + _ERF_A4) * t) + _ERF_A3) * t + _ERF_A2) * t + _ERF_A1) * t * math.exp(-abs_x * abs_x)
    return sign * y


def chi_square_cdf(chi_squared: float) -> float:
    """CDF of the chi-square distribution with one degree of freedom."""
    if chi_squared < 0:
        return 0.0
    return erf(math.sqrt(chi_squared / 2))


def count_pairs(pixels: Sequence[int]) -> Tuple[List[int], List[int]]:
    """Build the per-category pair histograms for the first channel of a pixel buffer.

    Pixels are taken two at a time (k, k+1). A pair is counted in category ``a``
    (the first pixel's value) when ``0 < a < 255``; it additionally counts as
    "greater" when the second pixel's value exceeds ``a``.
    Returns ``(observed_greater, total_pairs)``, each of length 255.
    The buffer length is assumed to be a multiple of 4.
    """
    observed_greater = [0] * CATEGORIES
    total_pairs = [0] * CATEGORIES
    for i in range(0, len(pixels) - CHANNEL_STRIDE, PAIR_STRIDE):
        a = pixels[i]
        if 0 < a < 255:
            total_pairs[a] += 1
            if pixels[i + CHANNEL_STRIDE] > a:
                observed_greater[a] += 1
    return observed_greater, total_pairs


def chi_square_statistic(observed_greater: Sequence[int], total_pairs: Sequence[int]) -> Tuple[float, int]:
    """Return ``(chi_squared, degrees_of_freedom)`` against a 50/50 greater/lesser split."""
    chi_squared = 0.0
    degrees_of_freedom = 0
    for i in range(1, min(len(total_pairs), CATEGORIES)):
        total = total_pairs[i]
        if total > 0:
            expected = total / 2
            diff = observed_greater[i] - expected
            chi_squared += (diff * diff) / expected
            degrees_of_freedom += 1
    return chi_squared, degrees_of_freedom


def chi_square_probability(observed_greater: Sequence[int], total_pairs: Sequence[int]) -> float:
    """Reduce the pair histograms to a probability in [0, 1].

    The statistic is averaged over the categories that have pairs and read
    against a one degree of freedom chi-square CDF. Higher means the pair
    ordering deviates more from a natural image. No categories means no
    evidence, so 0 is returned.
    """
    chi_squared, degrees_of_freedom = chi_square_statistic(observed_greater, total_pairs)
    if degrees_of_freedom == 0:
        return 0.0
    normalized_chi = chi_squared / degrees_of_freedom
    probability = chi_square_cdf(normalized_chi)
    logger.debug(f'Chi-square: chi2={chi_squared}, dof={degrees_of_freedom}, '
                 f'normalized={normalized_chi}, probability={probability}')
    return probability


def analyze_lsb(pixels: Sequence[int]) -> float:
    """Probability that the LSBs of an RGBA buffer's first channel were randomized."""
    observed_greater, total_pairs = count_pairs(pixels)
    return chi_square_probability(observed_greater, total_pairs)


def classify(probability: float) -> AnalysisResult:
    if probability > SUSPICIOUS_THRESHOLD:
        status = ResultStatus.SUSPICIOUS
    elif probability > CLEAN_THRESHOLD:
        status = ResultStatus.INDETERMINATE
    else:
        status = ResultStatus.CLEAN
    return AnalysisResult(probability, STATUS_MESSAGES[status], status)


def analyze_pixels(pixels: Sequence[int]) -> AnalysisResult:
    logger.debug(f'Running chi-square LSB analysis on {len(pixels)} bytes')
    result = classify(analyze_lsb(pixels))
    logger.debug(f'Chi-square LSB result: {result.status.value} ({result.probability})')
    return result
