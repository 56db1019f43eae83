"""Audio I/O helpers.

The decoder consumes 16-bit little-endian mono PCM. Raw ``.raw``/``.pcm``
files are passed through unchanged; WAV files are decoded with
*soundfile* and down-mixed to mono with *numpy*.
"""

from __future__ import annotations

import errno
import logging
from pathlib import Path

import numpy as np
import soundfile as sf  # type: ignore

from yasp.exceptions import FileIOError
from yasp.utils.constant import DEFAULT_SAMPLE_RATE

__all__ = ["WAV_EXTENSIONS", "read_pcm"]

logger = logging.getLogger(__name__)

WAV_EXTENSIONS: frozenset[str] = frozenset({".wav", ".wave"})


def _read_wav(path: Path, expected_sr: int) -> bytes:
    """Decode a WAV file into mono int16 PCM bytes.

    Args:
        path: WAV file to decode.
        expected_sr: Sample rate the acoustic model was trained on.

    Returns:
        bytes: Interleaved-free mono int16 samples.

    Raises:
        FileIOError: If libsndfile cannot decode the file.

    """
    try:
        data, sr = sf.read(str(path), dtype="int16", always_2d=False)
    except (RuntimeError, sf.LibsndfileError) as exc:
        raise FileIOError(path, OSError(errno.EIO, str(exc))) from exc

    if data.ndim > 1:
        data = np.mean(data, axis=-1).astype(np.int16)  # convert to mono
    if sr != expected_sr:
        logger.warning(
            "Audio %s is sampled at %d Hz but the model expects %d Hz", path, sr, expected_sr
        )
    return data.astype("<i2", copy=False).tobytes()


def read_pcm(path: str | Path, sample_rate: int = DEFAULT_SAMPLE_RATE) -> bytes:
    """Read the whole utterance as raw PCM bytes.

    Args:
        path: Audio file; WAV containers are decoded, anything else is read
            as raw PCM in binary mode.
        sample_rate: Sample rate expected by the decoder.

    Returns:
        bytes: 16-bit little-endian mono PCM.

    Raises:
        FileIOError: If the file cannot be opened, read or decoded.

    """
    path = Path(path)
    if path.suffix.lower() in WAV_EXTENSIONS:
        if not path.is_file():
            raise FileIOError(path, FileNotFoundError(errno.ENOENT, "No such file or directory"))
        return _read_wav(path, sample_rate)
    try:
        with path.open("rb") as fh:
            return fh.read()
    except OSError as exc:
        logger.error("unable to open audio file %s. errno = %s", path, exc.strerror)
        raise FileIOError(path, exc) from exc
