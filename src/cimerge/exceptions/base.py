from __future__ import annotations


class CimergeError(Exception):
    """Base exception class for all cimerge-specific errors.

    All custom exceptions in cimerge inherit from this class. This allows
    catching every cimerge error at the CLI boundary while letting system
    exceptions propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            resolved = resolve(template, request)
        except CimergeError as e:
            logger.error("resolution_failed", error=e.message)
            sys.exit(1)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the CimergeError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
