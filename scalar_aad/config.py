"""
Runtime configuration for scalar_aad.

Values are read once from the environment at import time and can be
overridden by assigning to the class attributes.
"""

import os

import numpy as np


class AADConfig:
    # How NumPy floating-point events (divide by zero, invalid, overflow)
    # are reported inside operator rules: "ignore", "warn" or "raise".
    # Results are IEEE inf/nan in the first two modes.
    FP_ERRORS = os.getenv("SCALAR_AAD_FP_ERRORS", "ignore")

    # Level for loggers created by scalar_aad.logger.setup_logger
    LOG_LEVEL = os.getenv("SCALAR_AAD_LOG_LEVEL", "INFO")

    # Default bump for central finite differences (scalar_aad.bumping)
    BUMP_EPS = float(os.getenv("SCALAR_AAD_BUMP_EPS", "1e-6"))

    _FP_MODES = ("ignore", "warn", "raise")

    @staticmethod
    def errstate():
        """numpy.errstate context applied around every forward/backward rule."""
        mode = AADConfig.FP_ERRORS
        if mode not in AADConfig._FP_MODES:
            raise ValueError(
                f"SCALAR_AAD_FP_ERRORS must be one of {AADConfig._FP_MODES}, got {mode!r}"
            )
        return np.errstate(divide=mode, invalid=mode, over=mode, under="ignore")
