"""Section classifiers.

Each classifier reads the immutable :class:`MeasurementRecord` and returns
its own tagged section; none of them reads another's output.
"""

from pft_interpreter.classifiers.bronchodilator import evaluate_bronchodilator
from pft_interpreter.classifiers.diffusion import classify_diffusion
from pft_interpreter.classifiers.oximetry import evaluate_oximetry, resting_spo2_threshold
from pft_interpreter.classifiers.resistance import classify_resistance
from pft_interpreter.classifiers.serial import compare_with_previous
from pft_interpreter.classifiers.spirometry import classify_spirometry
from pft_interpreter.classifiers.volumes import classify_lung_volumes

__all__ = [
    "classify_diffusion",
    "classify_lung_volumes",
    "classify_resistance",
    "classify_spirometry",
    "compare_with_previous",
    "evaluate_bronchodilator",
    "evaluate_oximetry",
    "resting_spo2_threshold",
]
