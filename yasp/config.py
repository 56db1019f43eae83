"""Configuration dataclasses for the interpret pipeline.

This module groups related settings so that the decode orchestrator, the
interpret entry points and the CLI pass one object around instead of a
long list of keyword arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from yasp.utils.constant import (
    DEFAULT_BEAM,
    DEFAULT_CMN,
    DEFAULT_DITHER,
    DEFAULT_HYPOTHESIS_PATH,
    DEFAULT_LANGUAGE_WEIGHT,
    DEFAULT_PBEAM,
    DEFAULT_SAMPLE_RATE,
    MODEL_DIR,
    MODEL_LANGUAGE,
)


@dataclass(frozen=True)
class EngineConfig:
    """Settings used to construct the external decoding engine.

    The model directory replaces a process-wide override: it is fixed when
    the config is created and read-only afterwards.

    Attributes:
        model_dir: Directory containing the ``<language>`` model folder.
            ``None`` selects the models bundled with the engine.
        language: Model folder name (e.g. ``"en-us"``).
        sample_rate: Sample rate of the raw PCM input in Hz.
        beam: Main search beam width.
        pbeam: Phone-loop beam width.
        language_weight: Language model weight.
        cmn: Cepstral mean normalization mode.
        dither: Add 1/2-bit noise to the input.
        backtrace: Print the results and backtraces to the engine log.
        dictcase: Keep dictionary entries case sensitive.

    """

    model_dir: Path | None = Path(MODEL_DIR) if MODEL_DIR else None
    language: str = MODEL_LANGUAGE
    sample_rate: int = DEFAULT_SAMPLE_RATE
    beam: float = DEFAULT_BEAM
    pbeam: float = DEFAULT_PBEAM
    language_weight: float = DEFAULT_LANGUAGE_WEIGHT
    cmn: str = DEFAULT_CMN
    dither: bool = DEFAULT_DITHER
    backtrace: bool = True
    dictcase: bool = True

    def model_paths(self, default_dir: Path) -> tuple[Path, Path, Path]:
        """Resolve the acoustic model, language model and dictionary paths.

        Args:
            default_dir: Directory used when ``model_dir`` is unset.

        Returns:
            A ``(hmm, lm, dict)`` tuple of paths.

        """
        base = (self.model_dir or default_dir) / self.language
        return (
            base / self.language,
            base / f"{self.language}.lm.bin",
            base / f"cmudict-{self.language}.dict",
        )


@dataclass
class OutputConfig:
    """Groups output-related settings.

    Attributes:
        output: Path of the serialized transcript, or ``None`` to keep it in memory.
        output_format: Formatter name registered in ``yasp.formatting``.
        hypothesis_path: Where a synthesized transcript is written.

    """

    output: Path | None = None
    output_format: str = "json"
    hypothesis_path: Path = Path(DEFAULT_HYPOTHESIS_PATH)


@dataclass
class UIConfig:
    """Groups UI and logging settings.

    Attributes:
        verbose: Enable detailed diagnostic output.
        quiet: Suppress non-error output.
        logfile: Base path for the info/error log files, or ``None``.

    """

    verbose: bool = False
    quiet: bool = False
    logfile: Path | None = None
