import logging
from functools import partial, reduce
from typing import Callable, List, Optional

from reqcsv import BASE_LOGGERNAME

logger = logging.getLogger(f"{BASE_LOGGERNAME}.normalize")


class TextPreprocessor:
    """
    Preprocess page text using a configurable pipeline of transformation functions.
    """

    def __init__(self, pipeline: Optional[List[Callable[[str], str]]] = None) -> None:
        self._pipeline: List[Callable[[str], str]] = pipeline or []

    def add_processor(self, processor_func: Callable[[str], str]) -> None:
        """Add a processor function to the pipeline."""
        self._pipeline.append(processor_func)

    def clean_text(self, text: str) -> str:
        """
        Apply all pipeline functions to input text sequentially.

        Args:
            text: Input text.

        Returns:
            Processed text.
        """
        if not self._pipeline:
            return text
        return reduce(lambda x, func: func(x), self._pipeline, text)

    @staticmethod
    def replace(text: str, replace_tokens: List[str], replace_with: str) -> str:
        for token in replace_tokens:
            text = text.replace(token, replace_with)
        return text


def build_preprocessor(replace_tokens: List[str], replace_with: str = " ") -> Optional[TextPreprocessor]:
    """Return a preprocessor that strips running headers/footers, or None when there is nothing to strip."""
    tokens = [token for token in replace_tokens if token]
    if not tokens:
        return None
    preprocessor = TextPreprocessor()
    preprocessor.add_processor(partial(TextPreprocessor.replace, replace_tokens=tokens, replace_with=replace_with))
    logger.debug(f"Replacing {len(tokens)} token(s) in page text")
    return preprocessor
