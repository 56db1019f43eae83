"""Project-wide constants for convenient reuse."""

from __future__ import annotations

import os
import sys
from typing import Final

from yasp.utils.env_loader import load_project_env

# Ensure .env is loaded exactly once at import time for the whole project
if "pytest" not in sys.modules:
    load_project_env()


# Model directory holding ``<lang>/<lang>``, ``<lang>/<lang>.lm.bin`` and the
# pronunciation dictionary. Empty means "use the models bundled with pocketsphinx".
MODEL_DIR: Final[str | None] = os.getenv("YASP_MODEL_DIR") or None
MODEL_LANGUAGE: Final[str] = os.getenv("YASP_MODEL_LANGUAGE", "en-us")

# Where the free-recognition pass writes its synthesized transcript.
DEFAULT_HYPOTHESIS_PATH: Final[str] = os.getenv("YASP_HYPOTHESIS_PATH", "generated_hypothesis")

# Base path of the info log; the error log gets ERROR_LOG_SUFFIX appended.
DEFAULT_LOG_FILE: Final[str] = os.getenv("YASP_LOG_FILE", "default_log")
ERROR_LOG_SUFFIX: Final[str] = "_err"

# Raw PCM expected by the acoustic model (16-bit little-endian, mono)
DEFAULT_SAMPLE_RATE: Final[int] = int(os.getenv("YASP_SAMPLE_RATE", "16000"))

# Decoder tuning passed to pocketsphinx
DEFAULT_BEAM: Final[float] = float(os.getenv("YASP_BEAM", "1e-20"))
DEFAULT_PBEAM: Final[float] = float(os.getenv("YASP_PBEAM", "1e-20"))
DEFAULT_LANGUAGE_WEIGHT: Final[float] = float(os.getenv("YASP_LW", "2.0"))
DEFAULT_CMN: Final[str] = os.getenv("YASP_CMN", "batch")
DEFAULT_DITHER: Final[bool] = os.getenv("YASP_DITHER", "True").lower() == "true"

# Longest transcript token in bytes; anything longer is rejected.
MAX_TOKEN_BYTES: Final[int] = 1023

# Sentinel labels emitted by the engine
UTTERANCE_START: Final[str] = "<s>"
UTTERANCE_END: Final[str] = "</s>"
WORD_SILENCE: Final[str] = "<sil>"
PHONE_SILENCE: Final[str] = "SIL"

# Logging configuration
POCKETSPHINX_LOG_LEVEL: Final[str] = os.getenv("POCKETSPHINX_LOG_LEVEL", "ERROR")
