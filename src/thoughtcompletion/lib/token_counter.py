"""Token counting for built prompts."""

import tiktoken

ENCODING_NAME = "cl100k_base"


class TokenCounter:
    """Counts tokens with a tiktoken encoding.

    Counts are approximate for non-OpenAI models but good enough to compare
    prompt sizes against ``max_tokens`` and context limits.
    """

    def __init__(self, encoding_name: str = ENCODING_NAME) -> None:
        """Initialize the counter.

        Args:
            encoding_name: tiktoken encoding to load
        """
        self._encoder = tiktoken.get_encoding(encoding_name)

    def count(self, text: str) -> int:
        """Count tokens in text.

        Args:
            text: Text to count tokens for.

        Returns:
            Token count.
        """
        if not text:
            return 0
        return len(self._encoder.encode(text))
