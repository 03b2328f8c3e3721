"""
Speech Synthesizer

Offline text-to-speech on pyttsx3 (SAPI5 on Windows, NSSpeechSynthesizer
on macOS, espeak on Linux).

Text is handed to the engine as-is, never to a shell or command line.
Playback runs on a single daemon worker thread that owns the engine;
speak() only queues the text and returns.
"""

import queue
import threading
from typing import Any, Callable

import pyttsx3

from pcdriver.common.logging_setup import get_service_logger

logger = get_service_logger("system.speech")

# pyttsx3 rate step per unit of the -10..10 setting, in words per minute
RATE_STEP_WPM = 10


class SpeechSynthesizer:
    """Fire-and-forget text-to-speech"""

    def __init__(
        self,
        rate: int = 0,
        engine_factory: Callable[[], Any] = pyttsx3.init,
    ):
        self.rate = max(-10, min(10, rate))
        self._engine_factory = engine_factory
        self._queue: queue.Queue[str] = queue.Queue()
        self._worker: threading.Thread | None = None
        self._worker_lock = threading.Lock()

    def speak(self, text: str) -> None:
        """Queue text for playback and return immediately"""
        if not text or not text.strip():
            logger.debug("Nothing to speak")
            return

        self._ensure_worker()
        self._queue.put(text)

    def wait_until_done(self) -> None:
        """Block until everything queued so far has been played"""
        self._queue.join()

    def _ensure_worker(self) -> None:
        with self._worker_lock:
            if self._worker is None or not self._worker.is_alive():
                self._worker = threading.Thread(
                    target=self._run,
                    name="pcdriver-speech",
                    daemon=True,
                )
                self._worker.start()

    def _init_engine(self) -> Any:
        """Create the engine on the worker thread, None if no backend"""
        try:
            engine = self._engine_factory()
        except Exception as e:
            logger.warning(f"No TTS backend available: {e}")
            return None

        if self.rate:
            try:
                base = int(engine.getProperty("rate"))
                engine.setProperty("rate", base + self.rate * RATE_STEP_WPM)
            except Exception as e:
                logger.warning(f"Failed to set TTS rate: {e}")

        return engine

    def _run(self) -> None:
        engine = self._init_engine()

        while True:
            text = self._queue.get()
            try:
                if engine is None:
                    logger.warning(f"Dropped {len(text)} chars, no TTS backend")
                    continue
                engine.say(text)
                engine.runAndWait()
                logger.debug(f"Spoke {len(text)} chars")
            except Exception as e:
                logger.error(f"TTS playback failed: {e}")
            finally:
                self._queue.task_done()
